# -*- coding: utf-8 -*-
# File: core/__init__.py
# Purpose: Core 模块初始化

"""
FMD Exporter Core Module
包含核心数据结构、二进制读写与几何变换
"""

__all__ = [
    'schema',
    'errors',
    'transform',
    'io',
]
