# -*- coding: utf-8 -*-
"""
FMD Exporter - Binary Writer

- Append-only binary sink over any writable stream (file, BytesIO, gzip stream)
- All values little-endian regardless of host byte order
- Scalars (int32/float32), length-prefixed UTF-8 strings, vectors, 4x4 matrices
- No error paths of its own: stream failures propagate as OSError
"""

from __future__ import annotations
import struct
from dataclasses import dataclass
from typing import BinaryIO, Sequence

_INT32 = struct.Struct('<i')
_FLOAT32 = struct.Struct('<f')
_VEC2 = struct.Struct('<2f')
_VEC3 = struct.Struct('<3f')
_MAT4 = struct.Struct('<16f')


@dataclass
class BinaryWriter:
    """
    Minimalistic little-endian writer.
    """
    stream: BinaryIO

    # ---- scalar writers ----
    def write_int32(self, v: int) -> None:
        self.stream.write(_INT32.pack(int(v)))

    def write_float32(self, v: float) -> None:
        self.stream.write(_FLOAT32.pack(float(v)))

    # ---- compound writers ----
    def write_vector2(self, v: Sequence[float]) -> None:
        self.stream.write(_VEC2.pack(float(v[0]), float(v[1])))

    def write_vector3(self, v: Sequence[float]) -> None:
        self.stream.write(_VEC3.pack(float(v[0]), float(v[1]), float(v[2])))

    def write_matrix4x4(self, mat) -> None:
        """
        16 x f32, row-major: for row 1..4, for column 1..4.
        """
        self.stream.write(_MAT4.pack(*(float(mat[r][c]) for r in range(4) for c in range(4))))

    def write_string(self, s: str) -> None:
        """
        UTF-8 bytes prefixed by int32 byte length. No terminator, no BOM.
        """
        data = s.encode('utf-8')
        self.write_int32(len(data))
        self.stream.write(data)

    # ---- bulk writers ----
    def write_bytes(self, data: bytes) -> None:
        self.stream.write(data)
