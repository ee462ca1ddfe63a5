# 相对路径: validators/hex_diff.py
# 主要功能: 将两个 .fmd 文件的解压正文逐字节对比，输出差异报告 (偏移量、旧值、新值)。
#
# 注意:
#   - gzip 流本身可能因压缩参数不同而不同，因此对比解压后的正文。
#   - 文件头不一致时直接报告，不再对比正文。

from typing import Dict, List

from ..config.constants import FMD_MAGIC
from .structure_checker import decompress_body


class HexDiff:
    """十六进制差异比对器"""

    def compare_bytes(self, data1: bytes, data2: bytes, max_diffs: int = 100) -> Dict:
        """
        对比两段 .fmd 数据。
        参数:
            data1: 第一个文件内容
            data2: 第二个文件内容
            max_diffs: 最大记录差异数量 (避免输出过大)
        返回:
            {
                "header_same": bool,
                "diffs": List[Dict],
                "total_diffs": int,
                "same": bool
            }
        """
        header_same = data1[:len(FMD_MAGIC)] == data2[:len(FMD_MAGIC)]
        if not header_same:
            return {"header_same": False, "diffs": [], "total_diffs": 1, "same": False}

        body1 = decompress_body(data1)
        body2 = decompress_body(data2)

        diffs: List[Dict] = []
        total_diffs = 0
        for i in range(max(len(body1), len(body2))):
            v1 = body1[i] if i < len(body1) else None
            v2 = body2[i] if i < len(body2) else None
            if v1 != v2:
                total_diffs += 1
                if len(diffs) < max_diffs:
                    diffs.append({
                        "offset": i,
                        "file1_val": f"{v1:02X}" if v1 is not None else "EOF",
                        "file2_val": f"{v2:02X}" if v2 is not None else "EOF"
                    })

        return {
            "header_same": True,
            "diffs": diffs,
            "total_diffs": total_diffs,
            "same": total_diffs == 0
        }

    def compare_files(self, file1: str, file2: str, max_diffs: int = 100) -> Dict:
        with open(file1, "rb") as f1, open(file2, "rb") as f2:
            result = self.compare_bytes(f1.read(), f2.read(), max_diffs)
        result["file1"] = file1
        result["file2"] = file2
        return result

    def format_report(self, result: Dict) -> str:
        """
        格式化差异报告为字符串。
        """
        lines = []
        if "file1" in result:
            lines.append(f"对比文件: {result['file1']} vs {result['file2']}")
        if not result["header_same"]:
            lines.append("结果: 文件头不一致")
            return "\n".join(lines)
        lines.append(f"总差异数: {result['total_diffs']}")
        if result["same"]:
            lines.append("结果: 正文完全一致")
        else:
            lines.append("结果: 存在差异")
            for d in result["diffs"]:
                lines.append(
                    f"偏移 {d['offset']:08X}: file1={d['file1_val']} file2={d['file2_val']}"
                )
            if result["total_diffs"] > len(result["diffs"]):
                lines.append(f"... 还有 {result['total_diffs'] - len(result['diffs'])} 处差异未显示")
        return "\n".join(lines)
