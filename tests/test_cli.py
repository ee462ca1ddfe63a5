import pytest

from fmd_exporter import ExportSettings
from fmd_exporter.cli import main


@pytest.mark.parametrize("modifier, pre_transform, use_texture", [
    (None, False, False),
    ("", False, False),
    ("pretrans", True, False),
    ("texture", False, True),
    ("pretranstexture", True, True),
    ("TexturePreTrans", True, True),
    ("other", False, False),
])
def test_from_modifier(modifier, pre_transform, use_texture):
    settings = ExportSettings.from_modifier(modifier)
    assert settings.pre_transform is pre_transform
    assert settings.use_model_texture is use_texture


def test_missing_argument_prints_usage(capsys):
    assert main([]) == 1
    out = capsys.readouterr().out
    assert "fmd-export" in out
    assert "pretranstexture" in out


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.obj")]) == 1
    assert "Invalid filename (does not exist)." in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == []


OBJ = """\
o Quad
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
f 1 2 3
f 1 3 4
"""


def test_export_writes_model_and_manifest(tmp_path):
    pytest.importorskip("trimesh")
    source = tmp_path / "quad.obj"
    source.write_text(OBJ)

    assert main([str(source), "texture", "--quiet", "--audit"]) == 0

    assert (tmp_path / "quad.fmd").read_bytes()[:6] == b"FMD001"
    manifest = (tmp_path / "quad.fmi").read_text(encoding="utf-8")
    assert manifest.splitlines()[0] == "model=quad"
    audit_log = (tmp_path / "quad.audit.log").read_text(encoding="utf-8")
    assert "审计: 0 错误" in audit_log
