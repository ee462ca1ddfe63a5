# File: core/errors.py
# Purpose: 导出异常定义
# Notes:
# - ExportError 为所有致命导出错误的基类
# - 非致命问题（缺失节点、法线数量不一致等）只记录日志，不抛异常


class ExportError(RuntimeError):
    """导出失败"""


class SceneInputError(ExportError):
    """场景输入无效（读取失败、空面、矩阵形状错误等）"""


class SingularTransformError(ExportError):
    """有效变换矩阵不可逆，无法计算法线矩阵"""

    def __init__(self, mesh_name: str):
        super().__init__(f"网格 {mesh_name} 的变换矩阵不可逆，无法计算法线矩阵")
        self.mesh_name = mesh_name


class ExportIOError(ExportError):
    """写入输出文件失败"""


class FormatError(ValueError):
    """FMD 文件格式错误（解码端）"""
