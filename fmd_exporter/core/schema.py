# File: core/schema.py
# Purpose: FMD 导出数据结构定义（dataclass）
# Notes:
# - Scene / Node / Mesh / Bone / Material：由外部场景提供者构建，导出期间只读
# - 矩阵统一为 numpy (4, 4) 数组，[行][列] 索引，列向量约定（平移在第 4 列）
# - ExportResult / BoundingBox：导出结果与诊断信息

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .errors import SceneInputError


Vector2 = Tuple[float, float]
Vector3 = Tuple[float, float, float]


def identity_matrix() -> np.ndarray:
    """4x4 单位矩阵"""
    return np.identity(4, dtype=np.float64)


def to_matrix4x4(value) -> np.ndarray:
    """
    转换任意 4x4 嵌套序列或 16 元素行主序序列为 numpy 矩阵

    参数:
        value: 4x4 嵌套列表 / 16 元素序列 / numpy 数组

    返回:
        (4, 4) float64 数组
    """
    mat = np.asarray(value, dtype=np.float64)
    if mat.shape == (16,):
        mat = mat.reshape(4, 4)
    if mat.shape != (4, 4):
        raise SceneInputError(f"矩阵形状无效: {mat.shape}，期望 (4, 4)")
    return mat


# ==================== 场景数据结构 ====================

@dataclass(eq=False)
class Node:
    """场景节点（名称不保证唯一，子节点归父节点所有，无环）"""
    name: str
    transform: np.ndarray = field(default_factory=identity_matrix)  # 局部变换
    children: List["Node"] = field(default_factory=list)

    def __post_init__(self):
        self.transform = to_matrix4x4(self.transform)

    def iter_preorder(self):
        """先序遍历（自身 → 子节点，按给定顺序）"""
        yield self
        for child in self.children:
            yield from child.iter_preorder()


@dataclass
class VertexWeight:
    """顶点权重（不校验跨骨骼的权重和）"""
    vertex_id: int
    weight: float


@dataclass(eq=False)
class Bone:
    """骨骼"""
    name: str
    offset_matrix: np.ndarray = field(default_factory=identity_matrix)  # 绑定姿态逆矩阵
    weights: List[VertexWeight] = field(default_factory=list)

    def __post_init__(self):
        self.offset_matrix = to_matrix4x4(self.offset_matrix)


@dataclass
class Mesh:
    """
    网格

    faces 中每个面包含 1~3 个顶点索引；只消费第 0 个 UV 通道
    """
    name: str
    vertices: List[Vector3] = field(default_factory=list)
    faces: List[Sequence[int]] = field(default_factory=list)
    uv_channels: List[List[Sequence[float]]] = field(default_factory=list)
    normals: List[Vector3] = field(default_factory=list)
    bones: List[Bone] = field(default_factory=list)
    material_index: int = 0

    @property
    def uv0(self) -> List[Sequence[float]]:
        """第 0 个 UV 通道（不存在时为空）"""
        return self.uv_channels[0] if self.uv_channels else []


@dataclass
class Material:
    """材质（纹理路径均为可选）"""
    name: str = ""
    texture_diffuse: Optional[str] = None
    texture_specular: Optional[str] = None
    texture_reflection: Optional[str] = None
    texture_normal: Optional[str] = None


@dataclass
class Scene:
    """外部场景提供者交付的完整场景"""
    root: Node
    meshes: List[Mesh] = field(default_factory=list)
    materials: List[Material] = field(default_factory=list)

    def get_material(self, mesh: Mesh) -> Optional[Material]:
        """按网格的材质索引取材质，索引无效时返回 None"""
        if 0 <= mesh.material_index < len(self.materials):
            return self.materials[mesh.material_index]
        return None


# ==================== 导出结果 ====================

@dataclass
class BoundingBox:
    """
    轴对齐包围盒（累加器）

    沿用旧版行为：min/max 均以原点 (0, 0, 0) 为初值，因此总是包含原点
    """
    min: Vector3 = (0.0, 0.0, 0.0)
    max: Vector3 = (0.0, 0.0, 0.0)

    def include_points(self, points: np.ndarray) -> None:
        """按分量扩展包围盒"""
        if len(points) == 0:
            return
        lo = np.minimum(np.asarray(self.min), points.min(axis=0))
        hi = np.maximum(np.asarray(self.max), points.max(axis=0))
        self.min = (float(lo[0]), float(lo[1]), float(lo[2]))
        self.max = (float(hi[0]), float(hi[1]), float(hi[2]))

    @property
    def size(self) -> Vector3:
        return (self.max[0] - self.min[0],
                self.max[1] - self.min[1],
                self.max[2] - self.min[2])


@dataclass
class ExportResult:
    """单次导出的结果"""
    manifest: str
    written_meshes: List[str] = field(default_factory=list)
    skipped_meshes: List[str] = field(default_factory=list)
    bounds: BoundingBox = field(default_factory=BoundingBox)

    @property
    def mesh_count(self) -> int:
        return len(self.written_meshes)


# ==================== 审计日志 ====================

@dataclass
class AuditEntry:
    """审计日志条目"""
    code: str
    message: str
    severity: str  # INFO / WARNING / ERROR
    object_name: Optional[str] = None
    timestamp: str = ""
