import gzip

import pytest

from fmd_exporter import FormatError
from fmd_exporter.core.io.binary_reader import BinaryReader
from fmd_exporter.validators.hex_diff import HexDiff
from fmd_exporter.validators.structure_checker import StructureChecker, decompress_body

from conftest import make_scene, translation


def test_bad_magic_is_rejected():
    with pytest.raises(FormatError):
        decompress_body(b"FMD002" + gzip.compress(b""))


def test_corrupt_body_is_rejected():
    with pytest.raises(FormatError):
        decompress_body(b"FMD001not gzip at all")


def test_truncated_body_is_rejected():
    data = b"FMD001" + gzip.compress(b"\x00" * 40)
    with pytest.raises(FormatError):
        StructureChecker().read_bytes(data)


def test_reader_rejects_negative_count():
    with pytest.raises(FormatError):
        BinaryReader(b"\xff\xff\xff\xff").count()


def test_check_valid_export(make_processor, scene):
    data, _ = make_processor().export_bytes("model", scene)
    report = StructureChecker().check_bytes(data)
    assert report["errors"] == []
    assert report["meshes"] == 3
    assert report["nodes"] == 4


def test_check_reports_format_errors():
    report = StructureChecker().check_bytes(b"XXXXXX")
    assert report["meshes"] == 0
    assert len(report["errors"]) == 1


def test_check_missing_file(tmp_path):
    report = StructureChecker().check_file(str(tmp_path / "missing.fmd"))
    assert report["errors"]


def test_check_reports_out_of_range_faces(make_processor, scene):
    scene.meshes[1].faces = [(0, 1, 7)]
    data, _ = make_processor().export_bytes("model", scene)
    report = StructureChecker().check_bytes(data)
    assert len(report["errors"]) == 1
    assert "leg.1" in report["errors"][0]


def test_hex_diff_identical_exports(make_processor):
    first, _ = make_processor().export_bytes("model", make_scene())
    second, _ = make_processor().export_bytes("model", make_scene())
    result = HexDiff().compare_bytes(first, second)
    assert result["same"]
    assert result["total_diffs"] == 0


def test_hex_diff_reports_body_offsets(make_processor):
    first, _ = make_processor().export_bytes("model", make_scene())
    changed = make_scene()
    changed.root.transform = translation(1.0, 0.0, 0.0)
    second, _ = make_processor().export_bytes("model", changed)

    diff = HexDiff()
    result = diff.compare_bytes(first, second)
    assert not result["same"]
    # root transform opens the body and is repeated in the node tree
    assert result["diffs"][0]["offset"] < 64
    assert result["diffs"][-1]["offset"] >= 64
    assert "存在差异" in diff.format_report(result)


def test_hex_diff_header_mismatch():
    result = HexDiff().compare_bytes(b"FMD001", b"FMD002")
    assert not result["header_same"]
    assert not result["same"]
