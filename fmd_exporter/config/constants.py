# -*- coding: utf-8 -*-
"""
FMD 常量定义
"""

# 文件格式常量
FMD_MAGIC = b"FMD001"  # 3 字符格式名 + 3 位版本号（不压缩）

# gzip 头部时间戳固定为 0，保证重复导出逐字节一致
GZIP_MTIME = 0

# 文件扩展名
EXT_MODEL = ".fmd"
EXT_MANIFEST = ".fmi"
EXT_AUDIT = ".audit.log"

# 不参与纹理清单的网格前缀（仍然写入几何数据）
EXCLUDED_MESH_PREFIXES = (
    "marker_",
    "collisionconvex_",
    "collisioncomplex_",
)

# 纹理清单
MANIFEST_MODEL_KEY = "model"
MANIFEST_PLACEHOLDER = "UNKNOWN"
MANIFEST_CHANNEL_SEPARATOR = ":::"
MANIFEST_CHANNEL_SPECULAR = "specular"
MANIFEST_CHANNEL_REFLECTIVITY = "reflectivity"
MANIFEST_CHANNEL_NORMAL = "normal"

# 节点名归一化（网格名 → 节点名查找）
NODE_NAME_FOLD_CHARS = ("#", ".")
NODE_NAME_FOLD_TARGET = "_"

# 命令行修饰符关键字
MODIFIER_PRETRANSFORM = "pretrans"
MODIFIER_TEXTURE = "texture"

# 默认值
DEFAULT_WEIGHT_TOLERANCE = 1e-3
