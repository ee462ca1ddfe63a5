# File: core/transform.py
# Purpose: 几何变换（恒等模式 / 预变换模式），作用于顶点与法线，并累加包围盒
# Notes:
# - 预变换模式：网格按归一化名称查找同名节点，有效变换 = root.transform @ node.transform
#   （列向量约定：先应用节点变换，再应用根节点变换）
# - 找不到节点的网格整体跳过（只记录诊断，不报错）
# - 法线使用有效变换的逆转置（取 3x3 线性部分），正确处理非均匀缩放
# - 变换不可逆时抛出 SingularTransformError，绝不输出 NaN

from typing import Dict, Optional, Sequence

import numpy as np

from ..config.constants import NODE_NAME_FOLD_CHARS, NODE_NAME_FOLD_TARGET
from ..config.export_settings import ExportSettings
from .errors import SceneInputError, SingularTransformError
from .schema import BoundingBox, Mesh, Node, Scene, identity_matrix

# 条件数超过此值视为数值上不可逆
_MAX_CONDITION = 1.0 / np.finfo(np.float64).eps


def normalize_node_name(name: str) -> str:
    """
    节点名归一化：小写，'#' 与 '.' 替换为 '_'

    参数:
        name: 网格名或节点名

    返回:
        归一化后的名称
    """
    result = name.lower()
    for ch in NODE_NAME_FOLD_CHARS:
        result = result.replace(ch, NODE_NAME_FOLD_TARGET)
    return result


class NodeIndex:
    """
    节点名索引

    每次导出只构建一次：每个节点名归一化一次，同名时保留先序遍历中的第一个
    """

    def __init__(self, root: Node):
        self._nodes: Dict[str, Node] = {}
        for node in root.iter_preorder():
            self._nodes.setdefault(normalize_node_name(node.name), node)

    def find(self, mesh_name: str) -> Optional[Node]:
        return self._nodes.get(normalize_node_name(mesh_name))

    def __len__(self) -> int:
        return len(self._nodes)


def as_points(values: Sequence[Sequence[float]], what: str, mesh_name: str) -> np.ndarray:
    """转换为 (N, 3) 数组"""
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return arr.reshape(0, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise SceneInputError(f"网格 {mesh_name} 的 {what} 形状无效: {arr.shape}")
    return arr


class GeometryTransformer:
    """
    几何变换器

    持有一次导出内的包围盒累加器；包围盒仅用于诊断输出，不写入文件
    """

    def __init__(self, scene: Scene, settings: ExportSettings):
        self.root = scene.root
        self.pre_transform = settings.pre_transform
        self.bounds = BoundingBox()
        self._node_index = NodeIndex(scene.root) if self.pre_transform else None

    def mesh_transform(self, mesh: Mesh) -> Optional[np.ndarray]:
        """
        计算网格的有效变换

        返回:
            4x4 矩阵；预变换模式下找不到同名节点时返回 None（网格应被跳过）
        """
        if not self.pre_transform:
            return identity_matrix()
        node = self._node_index.find(mesh.name)
        if node is None:
            return None
        return self.root.transform @ node.transform

    @staticmethod
    def normal_matrix(transform: np.ndarray, mesh_name: str) -> np.ndarray:
        """
        法线矩阵：有效变换的逆转置，去掉平移得到 3x3

        参数:
            transform: 4x4 有效变换
            mesh_name: 用于错误信息

        返回:
            (3, 3) 数组
        """
        cond = np.linalg.cond(transform)
        if not np.isfinite(cond) or cond > _MAX_CONDITION:
            raise SingularTransformError(mesh_name)
        try:
            inverse = np.linalg.inv(transform)
        except np.linalg.LinAlgError as e:
            raise SingularTransformError(mesh_name) from e
        if not np.all(np.isfinite(inverse)):
            raise SingularTransformError(mesh_name)
        return inverse.T[:3, :3]

    def transform_vertices(self, mesh: Mesh, transform: np.ndarray) -> np.ndarray:
        """
        仿射变换顶点（w = 1），并扩展包围盒

        返回:
            (N, 3) 变换后的顶点
        """
        points = as_points(mesh.vertices, "顶点", mesh.name)
        result = points @ transform[:3, :3].T + transform[:3, 3]
        self.bounds.include_points(result)
        return result

    @staticmethod
    def transform_normals(mesh: Mesh, normal_matrix: np.ndarray) -> np.ndarray:
        """
        以方向向量变换法线（w = 0），不做归一化

        返回:
            (N, 3) 变换后的法线
        """
        normals = as_points(mesh.normals, "法线", mesh.name)
        return normals @ normal_matrix.T
