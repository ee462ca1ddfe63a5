# -*- coding: utf-8 -*-
"""
FMD Exporter - Binary Reader

Mirror of BinaryWriter, used by the structure checker and by tests to decode
.fmd bodies. Reads from an in-memory buffer and raises FormatError on EOF.
"""

from __future__ import annotations
import struct
from typing import Tuple

import numpy as np

from ..errors import FormatError

_INT32 = struct.Struct('<i')
_FLOAT32 = struct.Struct('<f')
_VEC2 = struct.Struct('<2f')
_VEC3 = struct.Struct('<3f')
_MAT4 = struct.Struct('<16f')


class BinaryReader:
    def __init__(self, data: bytes, base: int = 0):
        self.data = data
        self.ofs = base

    def tell(self) -> int:
        return self.ofs

    def remaining(self) -> int:
        return len(self.data) - self.ofs

    def _unpack(self, st: struct.Struct) -> tuple:
        if self.ofs + st.size > len(self.data):
            raise FormatError(f"unexpected EOF at {self.ofs:#x} (need {st.size} bytes)")
        v = st.unpack_from(self.data, self.ofs)
        self.ofs += st.size
        return v

    def int32(self) -> int:
        return self._unpack(_INT32)[0]

    def float32(self) -> float:
        return self._unpack(_FLOAT32)[0]

    def vector2(self) -> Tuple[float, float]:
        return self._unpack(_VEC2)

    def vector3(self) -> Tuple[float, float, float]:
        return self._unpack(_VEC3)

    def matrix4x4(self) -> np.ndarray:
        return np.array(self._unpack(_MAT4), dtype=np.float64).reshape(4, 4)

    def bytes(self, n: int) -> bytes:
        if n < 0:
            raise FormatError(f"negative length {n} at {self.ofs:#x}")
        b = self.data[self.ofs:self.ofs + n]
        if len(b) != n:
            raise FormatError("unexpected EOF")
        self.ofs += n
        return b

    def string(self) -> str:
        n = self.int32()
        try:
            return self.bytes(n).decode('utf-8')
        except UnicodeDecodeError as e:
            raise FormatError(f"invalid UTF-8 string at {self.ofs:#x}: {e}") from e

    def count(self) -> int:
        """Non-negative int32 element count."""
        n = self.int32()
        if n < 0:
            raise FormatError(f"negative count {n} at {self.ofs - 4:#x}")
        return n
