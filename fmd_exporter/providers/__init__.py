# -*- coding: utf-8 -*-
"""
场景提供者适配（trimesh 导入较慢，按需导入 trimesh_provider）
"""

__all__ = [
    'trimesh_provider',
]
