# -*- coding: utf-8 -*-
"""
FMD Exporter - Structure Checker
.fmd 文件结构解码与校验
- 解码：文件头 → gzip 解压 → 根变换 / 网格记录 / 节点树（BinaryReader 与写入端对称）
- 校验：文件头、截断、尾部多余字节、面索引与权重索引越界
"""

import gzip
import os
import zlib
from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np

from ..config.constants import FMD_MAGIC
from ..core.errors import FormatError
from ..core.io.binary_reader import BinaryReader
from ..core.schema import Bone, Mesh, Node, VertexWeight


@dataclass
class FmdDocument:
    """解码后的 .fmd 内容"""
    root_transform: np.ndarray
    meshes: List[Mesh] = field(default_factory=list)
    root: Node = None
    trailing_bytes: int = 0

    def node_names(self) -> List[str]:
        return [n.name for n in self.root.iter_preorder()]


def decompress_body(data: bytes) -> bytes:
    """校验文件头并解压正文"""
    if data[:len(FMD_MAGIC)] != FMD_MAGIC:
        raise FormatError(f"文件头错误: 期望 {FMD_MAGIC!r}, 实际 {data[:len(FMD_MAGIC)]!r}")
    try:
        return gzip.decompress(data[len(FMD_MAGIC):])
    except (OSError, EOFError, zlib.error) as e:
        raise FormatError(f"正文解压失败: {e}") from e


class StructureChecker:
    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    # ---- 解码 ----
    def read_bytes(self, data: bytes) -> FmdDocument:
        r = BinaryReader(decompress_body(data))
        doc = FmdDocument(root_transform=r.matrix4x4())
        mesh_count = r.count()
        for _ in range(mesh_count):
            doc.meshes.append(self._read_mesh(r))
        doc.root = self._read_node(r)
        doc.trailing_bytes = r.remaining()
        return doc

    def read_file(self, filepath: str) -> FmdDocument:
        with open(filepath, "rb") as f:
            return self.read_bytes(f.read())

    def _read_mesh(self, r: BinaryReader) -> Mesh:
        name = r.string()
        vertices = [r.vector3() for _ in range(r.count())]
        faces = [(r.int32(), r.int32(), r.int32()) for _ in range(r.count())]
        uvs = [r.vector2() for _ in range(r.count())]
        normals = [r.vector3() for _ in range(r.count())]
        bones = []
        for _ in range(r.count()):
            bone_name = r.string()
            weights = [VertexWeight(r.int32(), r.float32()) for _ in range(r.count())]
            bones.append(Bone(bone_name, offset_matrix=r.matrix4x4(), weights=weights))
        return Mesh(name=name, vertices=vertices, faces=faces, uv_channels=[uvs],
                    normals=normals, bones=bones)

    def _read_node(self, r: BinaryReader) -> Node:
        name = r.string()
        transform = r.matrix4x4()
        children = [self._read_node(r) for _ in range(r.count())]
        return Node(name, transform=transform, children=children)

    # ---- 校验 ----
    def check_bytes(self, data: bytes, filepath: str = "<memory>") -> Dict:
        report = {
            "filepath": filepath,
            "meshes": 0,
            "nodes": 0,
            "errors": [],
            "warnings": []
        }

        try:
            doc = self.read_bytes(data)
        except FormatError as e:
            report["errors"].append(str(e))
            return report

        report["meshes"] = len(doc.meshes)
        report["nodes"] = len(doc.node_names())

        if doc.trailing_bytes:
            report["errors"].append(f"正文尾部多余 {doc.trailing_bytes} 字节（网格数与记录不一致？）")

        for mesh in doc.meshes:
            vcount = len(mesh.vertices)
            bad_faces = [f for f in mesh.faces if min(f) < 0 or max(f) >= vcount]
            if bad_faces:
                report["errors"].append(f"网格 {mesh.name}: {len(bad_faces)} 个面引用超出顶点范围")
            if mesh.normals and len(mesh.normals) != vcount:
                report["warnings"].append(
                    f"网格 {mesh.name}: 法线数量 {len(mesh.normals)} 与顶点数量 {vcount} 不一致"
                )
            for bone in mesh.bones:
                bad = [w for w in bone.weights if not 0 <= w.vertex_id < vcount]
                if bad:
                    report["errors"].append(
                        f"网格 {mesh.name} 骨骼 {bone.name}: {len(bad)} 个权重引用超出顶点范围"
                    )

        if self.verbose:
            print(f"{filepath}: {report['meshes']} 网格, {report['nodes']} 节点, "
                  f"{len(report['errors'])} 错误, {len(report['warnings'])} 警告")
        return report

    def check_file(self, filepath: str) -> Dict:
        if not os.path.exists(filepath):
            return {"filepath": filepath, "meshes": 0, "nodes": 0,
                    "errors": [f"文件不存在: {filepath}"], "warnings": []}
        with open(filepath, "rb") as f:
            return self.check_bytes(f.read(), filepath)
