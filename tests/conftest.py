import numpy as np
import pytest

from fmd_exporter import ExportSettings, ExportProcessor, Logger
from fmd_exporter.core.schema import Bone, Material, Mesh, Node, Scene, VertexWeight
from fmd_exporter.writers.audit_writer import AuditLogger


def translation(x, y, z):
    m = np.identity(4)
    m[:3, 3] = (x, y, z)
    return m


def scaling(sx, sy, sz):
    return np.diag([sx, sy, sz, 1.0])


def triangle_mesh(name, material_index=0, offset=(0.0, 0.0, 0.0)):
    ox, oy, oz = offset
    return Mesh(
        name=name,
        vertices=[(ox, oy, oz), (ox + 1.0, oy, oz), (ox, oy + 1.0, oz)],
        faces=[(0, 1, 2)],
        uv_channels=[[(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)]],
        normals=[(0.0, 0.0, 1.0)] * 3,
        material_index=material_index,
    )


def make_scene():
    """
    Root
    ├── Arm (translate 1, 2, 3)
    │   └── Hand
    └── Leg#1
    """
    hand = Node("Hand", transform=translation(0.0, 0.5, 0.0))
    arm = Node("Arm", transform=translation(1.0, 2.0, 3.0), children=[hand])
    leg = Node("Leg#1", transform=scaling(2.0, 2.0, 2.0))
    root = Node("Root", transform=np.identity(4), children=[arm, leg])

    skinned = triangle_mesh("ARM", material_index=0)
    skinned.bones = [
        Bone("bone_upper", offset_matrix=translation(0.0, -1.0, 0.0),
             weights=[VertexWeight(0, 1.0), VertexWeight(1, 0.5)]),
        Bone("bone_lower", weights=[VertexWeight(1, 0.5), VertexWeight(2, 1.0)]),
    ]
    meshes = [
        skinned,
        triangle_mesh("leg.1", material_index=1),
        triangle_mesh("marker_spawn", material_index=0),
    ]
    materials = [
        Material("skin", texture_diffuse="textures/arm.png", texture_normal="textures/arm_n.png"),
        Material("cloth", texture_diffuse="textures/leg.png"),
    ]
    return Scene(root=root, meshes=meshes, materials=materials)


@pytest.fixture
def scene():
    return make_scene()


@pytest.fixture
def audit():
    return AuditLogger()


@pytest.fixture
def logger(audit):
    return Logger(audit_logger=audit, verbose=False)


@pytest.fixture
def make_processor(logger):
    def factory(**kwargs):
        kwargs.setdefault("verbose", False)
        return ExportProcessor(ExportSettings(**kwargs), logger)
    return factory
