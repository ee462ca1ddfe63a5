# File: writers/audit_writer.py
# Purpose: 收集导出诊断（带错误码），可保存为 <name>.audit.log
# Notes:
# - 由 Logger 转发写入，导出流程本身不直接调用
# - 严重性：ERROR / WARNING / INFO；INFO 条目不带错误码
# - 行格式：[时间戳] [严重性] [错误码] 消息 | Object: 对象名

import time
from collections import Counter
from typing import List, Optional

from ..core.schema import AuditEntry


class ErrorCode:
    """错误码"""

    NODE001 = "NODE001"  # 预变换模式下找不到同名节点，网格被跳过

    GEO001 = "GEO001"  # 空面（无顶点索引）
    GEO002 = "GEO002"  # 法线数量与顶点数量不一致
    GEO003 = "GEO003"  # 变换矩阵不可逆

    WGT001 = "WGT001"  # 顶点权重和偏离 1.0

    MAT001 = "MAT001"  # 材质索引无效

    INP001 = "INP001"  # 场景读取失败
    IO001 = "IO001"    # 输出文件写入失败


class AuditLogger:
    """
    AuditLogger
    -----------
    使用方式:
        audit = AuditLogger()
        logger = Logger(audit_logger=audit)
        ...
        audit.save("models/hero.audit.log")
    """

    def __init__(self):
        self.entries: List[AuditEntry] = []

    def add(self, severity: str, message: str, code: str = "",
            object_name: Optional[str] = None) -> None:
        """追加一条诊断"""
        self.entries.append(AuditEntry(
            code=code,
            message=message,
            severity=severity,
            object_name=object_name,
            timestamp=time.strftime("%Y-%m-%d %H:%M:%S", time.localtime()),
        ))

    def codes(self, severity: Optional[str] = None) -> List[str]:
        """按出现顺序返回错误码（可按严重性过滤）"""
        return [e.code for e in self.entries
                if e.code and (severity is None or e.severity == severity)]

    def get_summary(self) -> str:
        counts = Counter(e.severity for e in self.entries)
        return (f"审计: {counts['ERROR']} 错误, {counts['WARNING']} 警告, "
                f"{counts['INFO']} 信息")

    def save(self, filepath: str) -> None:
        """保存 audit.log（UTF-8）"""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write("# FMD Export Audit Log\n")
            f.write("# Format: [Timestamp] [Severity] [Code] Message | Object\n\n")
            for entry in self.entries:
                line = f"[{entry.timestamp}] [{entry.severity}]"
                if entry.code:
                    line += f" [{entry.code}]"
                line += f" {entry.message}"
                if entry.object_name:
                    line += f" | Object: {entry.object_name}"
                f.write(line + "\n")
