from .structure_checker import FmdDocument, StructureChecker
from .hex_diff import HexDiff

__all__ = [
    'FmdDocument',
    'StructureChecker',
    'HexDiff',
]
