# File: writers/node_writer.py
# Purpose: 先序递归写入节点树（名称、局部变换、子节点数、子节点）
# Notes:
# - 节点树由外部场景提供者持有，只读访问，不复制
# - 假定无环，不做环检测；叶子节点子节点数为 0 时自然终止

from ..core.io.binary_writer import BinaryWriter
from ..core.schema import Node
from ..utils.logger import Logger


class NodeWriter:
    """
    NodeWriter
    ----------
    节点记录布局:
        name (string)
        transform (16 x f32, 行主序)
        child_count (i32)
        children (递归)
    """

    def __init__(self, binw: BinaryWriter, logger: Logger):
        self.binw = binw
        self.logger = logger
        self.node_count = 0

    def write(self, node: Node) -> None:
        """写入节点及其全部子孙"""
        self.binw.write_string(node.name)
        self.logger.info(f"输出节点: {node.name}")
        self.binw.write_matrix4x4(node.transform)
        self.binw.write_int32(len(node.children))
        self.node_count += 1
        for child in node.children:
            self.write(child)
