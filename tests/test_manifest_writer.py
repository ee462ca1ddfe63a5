import pytest

from fmd_exporter import ExportSettings
from fmd_exporter.core.schema import Material, Mesh
from fmd_exporter.writers.audit_writer import ErrorCode
from fmd_exporter.writers.manifest_writer import ManifestWriter, is_manifest_excluded


@pytest.mark.parametrize("name, excluded", [
    ("marker_spawn", True),
    ("collisionconvex_hull", True),
    ("collisioncomplex_floor", True),
    ("Marker_spawn", False),
    ("wall_marker_", False),
    ("Wall", False),
])
def test_excluded_prefixes(name, excluded):
    assert is_manifest_excluded(name) is excluded


def test_first_line_is_model_name():
    writer = ManifestWriter("hero", ExportSettings())
    assert writer.to_text() == "model=hero\n"


@pytest.mark.parametrize("use_texture", [False, True])
def test_marker_never_appears(use_texture):
    writer = ManifestWriter("m", ExportSettings(use_model_texture=use_texture))
    added = writer.add_mesh(Mesh("marker_spawn"), Material(texture_diffuse="a.png"))
    assert added == 0
    assert "marker_spawn" not in writer.to_text()


def test_placeholder_without_texture_mode():
    writer = ManifestWriter("m", ExportSettings())
    writer.add_mesh(Mesh("Wall"), Material(texture_diffuse="wall.png"))
    assert writer.to_text() == "model=m\nWall=UNKNOWN\n"


def test_diffuse_only_gives_one_line():
    writer = ManifestWriter("m", ExportSettings(use_model_texture=True))
    assert writer.add_mesh(Mesh("Wall"), Material(texture_diffuse="textures/wall.png")) == 1
    assert writer.to_text().splitlines()[1:] == ["Wall=textures/wall.png"]


def test_all_channels():
    writer = ManifestWriter("m", ExportSettings(use_model_texture=True))
    material = Material(texture_diffuse="d.png", texture_specular="s.png",
                        texture_reflection="r.png", texture_normal="n.png")
    writer.add_mesh(Mesh("Door"), material)
    assert writer.to_text() == (
        "model=m\n"
        "Door=d.png\n"
        "Door:::specular=s.png\n"
        "Door:::reflectivity=r.png\n"
        "Door:::normal=n.png\n"
    )


def test_channels_are_independent_of_diffuse():
    writer = ManifestWriter("m", ExportSettings(use_model_texture=True))
    writer.add_mesh(Mesh("Glass"), Material(texture_reflection="env.png"))
    assert writer.to_text() == "model=m\nGlass:::reflectivity=env.png\n"


def test_material_without_textures_adds_nothing():
    writer = ManifestWriter("m", ExportSettings(use_model_texture=True))
    assert writer.add_mesh(Mesh("Plain"), Material()) == 0


def test_unresolved_material_is_reported(logger, audit):
    writer = ManifestWriter("m", ExportSettings(use_model_texture=True), logger)
    assert writer.add_mesh(Mesh("Lost", material_index=5), None) == 0
    assert audit.codes("WARNING") == [ErrorCode.MAT001]


def test_save(tmp_path):
    writer = ManifestWriter("m", ExportSettings())
    writer.add_mesh(Mesh("Wall"), None)
    target = tmp_path / "m.fmi"
    writer.save(str(target))
    assert target.read_bytes() == b"model=m\nWall=UNKNOWN\n"
