# File: writers/__init__.py
# Purpose: Writers 模块初始化

"""
FMD Exporter Writers Module
包含网格、节点树、纹理清单与审计日志写入器
"""

__all__ = [
    'mesh_writer',
    'node_writer',
    'manifest_writer',
    'audit_writer',
]
