# -*- coding: utf-8 -*-
"""
文件IO模块
"""

from .binary_writer import BinaryWriter
from .binary_reader import BinaryReader

__all__ = [
    'BinaryWriter',
    'BinaryReader',
]
