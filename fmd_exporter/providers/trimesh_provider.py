# File: providers/trimesh_provider.py
# Purpose: 场景提供者适配：trimesh.Scene → FMD 场景数据结构
# Notes:
# - 格式解码完全交给 trimesh，这里只做数据映射
# - 场景图的边（父 → 子）构成节点树，根节点为 graph.base_frame
# - 每个几何体对应一个网格，网格名取几何体名；材质按网格顺序一一对应
# - trimesh 只保留了从文件加载的贴图路径时才会写入 diffuse 路径

from collections import defaultdict
from typing import Dict, List, Optional

import numpy as np
import trimesh

from ..core.errors import SceneInputError
from ..core.schema import Material, Mesh, Node, Scene


def load_scene(filepath: str) -> Scene:
    """
    读取模型文件并转换为 Scene

    参数:
        filepath: trimesh 支持的任意模型文件

    返回:
        Scene
    """
    try:
        loaded = trimesh.load(filepath, force="scene")
    except Exception as e:
        raise SceneInputError(f"读取模型失败: {filepath}: {e}") from e
    return scene_from_trimesh(loaded)


def scene_from_trimesh(tm_scene: "trimesh.Scene") -> Scene:
    """
    转换 trimesh.Scene

    参数:
        tm_scene: trimesh 场景

    返回:
        Scene
    """
    graph = tm_scene.graph
    children: Dict[str, List[str]] = defaultdict(list)
    local: Dict[str, np.ndarray] = {}
    for parent, child, attr in graph.to_edgelist():
        children[str(parent)].append(str(child))
        local[str(child)] = np.asarray(attr.get("matrix", np.identity(4)), dtype=np.float64)

    def build(name: str) -> Node:
        return Node(name,
                    transform=local.get(name, np.identity(4)),
                    children=[build(c) for c in children.get(name, [])])

    root = build(str(graph.base_frame))

    meshes: List[Mesh] = []
    materials: List[Material] = []
    for geom_name, geometry in tm_scene.geometry.items():
        if not isinstance(geometry, trimesh.Trimesh):
            continue
        meshes.append(_convert_mesh(str(geom_name), geometry, len(materials)))
        materials.append(_convert_material(geometry))

    return Scene(root=root, meshes=meshes, materials=materials)


def _convert_mesh(name: str, geometry: "trimesh.Trimesh", material_index: int) -> Mesh:
    uv = _uv(geometry)
    return Mesh(
        name=name,
        vertices=np.asarray(geometry.vertices, dtype=np.float64).tolist(),
        faces=np.asarray(geometry.faces, dtype=np.int64).tolist(),
        uv_channels=[uv] if uv else [],
        normals=np.asarray(geometry.vertex_normals, dtype=np.float64).tolist(),
        material_index=material_index,
    )


def _uv(geometry: "trimesh.Trimesh") -> List[List[float]]:
    visual = geometry.visual
    if getattr(visual, "kind", None) != "texture" or getattr(visual, "uv", None) is None:
        return []
    return np.asarray(visual.uv, dtype=np.float64)[:, :2].tolist()


def _image_path(image) -> Optional[str]:
    # PIL 从文件打开的图像带有 filename
    path = getattr(image, "filename", None)
    return path or None


def _convert_material(geometry: "trimesh.Trimesh") -> Material:
    material = getattr(geometry.visual, "material", None)
    if material is None:
        return Material()
    diffuse = getattr(material, "image", None) or getattr(material, "baseColorTexture", None)
    normal = getattr(material, "normalTexture", None)
    return Material(
        name=str(getattr(material, "name", "") or ""),
        texture_diffuse=_image_path(diffuse),
        texture_normal=_image_path(normal),
    )
