import io
import struct

import numpy as np

from fmd_exporter.core.io.binary_reader import BinaryReader
from fmd_exporter.core.io.binary_writer import BinaryWriter


def _written(fn):
    buf = io.BytesIO()
    fn(BinaryWriter(buf))
    return buf.getvalue()


def test_int32_is_little_endian():
    assert _written(lambda w: w.write_int32(1)) == b"\x01\x00\x00\x00"
    assert _written(lambda w: w.write_int32(-1)) == b"\xff\xff\xff\xff"
    assert _written(lambda w: w.write_int32(0x01020304)) == b"\x04\x03\x02\x01"


def test_float32_is_little_endian():
    assert _written(lambda w: w.write_float32(1.0)) == b"\x00\x00\x80\x3f"


def test_string_is_length_prefixed_utf8_without_terminator():
    data = _written(lambda w: w.write_string("Arm"))
    assert data == b"\x03\x00\x00\x00Arm"


def test_string_length_counts_utf8_bytes():
    data = _written(lambda w: w.write_string("骨"))
    assert struct.unpack_from("<i", data)[0] == 3
    assert data[4:] == "骨".encode("utf-8")
    assert not data.startswith(b"\xef\xbb\xbf", 4)


def test_empty_string():
    assert _written(lambda w: w.write_string("")) == b"\x00\x00\x00\x00"


def test_matrix_is_written_row_major():
    mat = np.arange(16, dtype=np.float64).reshape(4, 4)
    data = _written(lambda w: w.write_matrix4x4(mat))
    assert len(data) == 64
    assert struct.unpack("<16f", data) == tuple(float(i) for i in range(16))


def test_reader_mirrors_writer():
    mat = np.arange(16, dtype=np.float64).reshape(4, 4)

    def write_all(w):
        w.write_int32(-7)
        w.write_float32(0.5)
        w.write_string("Hand")
        w.write_vector3((1.0, 2.0, 3.0))
        w.write_matrix4x4(mat)

    r = BinaryReader(_written(write_all))
    assert r.int32() == -7
    assert r.float32() == 0.5
    assert r.string() == "Hand"
    assert r.vector3() == (1.0, 2.0, 3.0)
    assert np.array_equal(r.matrix4x4(), mat)
    assert r.remaining() == 0
