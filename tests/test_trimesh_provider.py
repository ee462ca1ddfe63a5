import numpy as np
import pytest

trimesh = pytest.importorskip("trimesh")

from fmd_exporter import ExportSettings
from fmd_exporter.core.transform import GeometryTransformer
from fmd_exporter.providers.trimesh_provider import scene_from_trimesh

from conftest import translation


@pytest.fixture
def tm_scene():
    tm = trimesh.Scene()
    tm.add_geometry(trimesh.creation.box(), node_name="Box", geom_name="Box",
                    transform=translation(0.0, 0.0, 4.0))
    return tm


def test_node_tree(tm_scene):
    scene = scene_from_trimesh(tm_scene)
    assert scene.root.name == tm_scene.graph.base_frame
    assert [c.name for c in scene.root.children] == ["Box"]
    assert np.allclose(scene.root.children[0].transform, translation(0.0, 0.0, 4.0))


def test_geometry_becomes_mesh(tm_scene):
    scene = scene_from_trimesh(tm_scene)
    assert [m.name for m in scene.meshes] == ["Box"]
    mesh = scene.meshes[0]
    assert len(mesh.vertices) == 8
    assert len(mesh.faces) == 12
    assert len(mesh.normals) == len(mesh.vertices)
    assert mesh.uv_channels == []
    assert scene.get_material(mesh) is not None


def test_pretransform_finds_box_node(tm_scene):
    scene = scene_from_trimesh(tm_scene)
    transformer = GeometryTransformer(scene, ExportSettings(pre_transform=True))
    mesh = scene.meshes[0]
    vertices = transformer.transform_vertices(mesh, transformer.mesh_transform(mesh))
    assert np.isclose(vertices[:, 2].min(), 3.5)
    assert np.isclose(vertices[:, 2].max(), 4.5)
