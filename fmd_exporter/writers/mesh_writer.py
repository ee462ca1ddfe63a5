# File: writers/mesh_writer.py
# Purpose: 写入单个网格记录（顶点、三角面、UV0、法线、骨骼权重）
# Notes:
# - 顶点与法线先经 GeometryTransformer 变换
# - 不足 3 个索引的退化面扩展为三角形（重复第一个索引）
# - 法线数量与顶点数量不一致、权重和不为 1 时只告警，照常写入
# - 字段顺序严格对齐 FMD001 格式

from collections import defaultdict
from typing import Dict, Sequence, Tuple

import numpy as np

from ..config.export_settings import ExportSettings
from ..core.errors import SceneInputError
from ..core.io.binary_writer import BinaryWriter
from ..core.schema import Bone, Mesh
from ..core.transform import GeometryTransformer
from ..utils.logger import Logger
from .audit_writer import ErrorCode


def triangulate_face(indices: Sequence[int]) -> Tuple[int, int, int]:
    """
    退化面扩展为三角形

    规则:
        [a]        -> (a, a, a)
        [a, b]     -> (a, b, a)
        [a, b, c]  -> (a, b, c)
        超过 3 个索引时只取前 3 个

    参数:
        indices: 面的顶点索引

    返回:
        3 个索引
    """
    if len(indices) == 0:
        raise SceneInputError("面不包含任何顶点索引")
    first = indices[0]
    second = indices[1] if len(indices) > 1 else first
    third = indices[2] if len(indices) > 2 else first
    return (int(first), int(second), int(third))


class MeshWriter:
    """
    MeshWriter
    ----------
    写入网格记录到二进制流。

    记录布局:
        name (string)
        vertex_count (i32) + vertices (3 x f32, 已变换)
        face_count (i32) + faces (3 x i32)
        uv_count (i32) + uvs (2 x f32, 第 0 通道，不变换)
        normal_count (i32) + normals (3 x f32, 已变换)
        bone_count (i32) + bones:
            name (string)
            weight_count (i32) + (vertex_id i32, weight f32) 对
            offset_matrix (16 x f32)
    """

    def __init__(self, binw: BinaryWriter, transformer: GeometryTransformer,
                 settings: ExportSettings, logger: Logger):
        self.binw = binw
        self.transformer = transformer
        self.settings = settings
        self.logger = logger

    def write(self, mesh: Mesh, transform: np.ndarray) -> None:
        """
        写入一个网格记录

        参数:
            mesh: 网格
            transform: 有效变换（由 GeometryTransformer.mesh_transform 给出）
        """
        binw = self.binw
        normal_matrix = self.transformer.normal_matrix(transform, mesh.name)

        binw.write_string(mesh.name)

        # 1. 顶点
        vertices = self.transformer.transform_vertices(mesh, transform)
        binw.write_int32(len(vertices))
        for v in vertices:
            binw.write_vector3(v)

        # 2. 三角面
        binw.write_int32(len(mesh.faces))
        for face in mesh.faces:
            try:
                a, b, c = triangulate_face(face)
            except SceneInputError as e:
                self.logger.error(str(e), mesh.name, code=ErrorCode.GEO001)
                raise SceneInputError(f"网格 {mesh.name}: {e}") from e
            binw.write_int32(a)
            binw.write_int32(b)
            binw.write_int32(c)

        # 3. UV（第 0 通道）
        uv0 = mesh.uv0
        binw.write_int32(len(uv0))
        for uv in uv0:
            binw.write_vector2(uv)

        # 4. 法线
        normals = self.transformer.transform_normals(mesh, normal_matrix)
        if len(normals) != len(vertices):
            self.logger.warning(
                f"法线数量 {len(normals)} 与顶点数量 {len(vertices)} 不一致",
                mesh.name, code=ErrorCode.GEO002
            )
        binw.write_int32(len(normals))
        for n in normals:
            binw.write_vector3(n)

        # 5. 骨骼
        binw.write_int32(len(mesh.bones))
        for bone in mesh.bones:
            self._write_bone(bone)
        self._check_weights(mesh)

    def _write_bone(self, bone: Bone) -> None:
        binw = self.binw
        binw.write_string(bone.name)
        binw.write_int32(len(bone.weights))
        for vw in bone.weights:
            binw.write_int32(vw.vertex_id)
            binw.write_float32(vw.weight)
        binw.write_matrix4x4(bone.offset_matrix)

    def _check_weights(self, mesh: Mesh) -> None:
        """权重和诊断：不修改数据，只告警"""
        if not mesh.bones:
            return
        totals: Dict[int, float] = defaultdict(float)
        for bone in mesh.bones:
            for vw in bone.weights:
                totals[vw.vertex_id] += vw.weight
        tolerance = self.settings.weight_tolerance
        off = [vid for vid, total in totals.items() if abs(total - 1.0) > tolerance]
        if off:
            self.logger.warning(
                f"{len(off)} 个顶点的权重和偏离 1.0（首个: 顶点 {off[0]} = {totals[off[0]]:.6f}）",
                mesh.name, code=ErrorCode.WGT001
            )
