# File: __init__.py
# Purpose: FMD Exporter 包入口
# Notes:
# - 将已解析的 3D 场景导出为 .fmd 二进制模型与 .fmi 纹理清单
# - 场景读取由外部场景提供者完成（见 providers/）

__version__ = "1.0.0"

from .config.export_settings import ExportSettings
from .core.errors import (
    ExportError,
    ExportIOError,
    FormatError,
    SceneInputError,
    SingularTransformError,
)
from .core.schema import (
    Bone,
    BoundingBox,
    ExportResult,
    Material,
    Mesh,
    Node,
    Scene,
    VertexWeight,
)
from .export_processor import ExportProcessor
from .utils.logger import Logger

__all__ = [
    'ExportSettings',
    'ExportProcessor',
    'Logger',
    'Scene',
    'Node',
    'Mesh',
    'Bone',
    'VertexWeight',
    'Material',
    'BoundingBox',
    'ExportResult',
    'ExportError',
    'ExportIOError',
    'FormatError',
    'SceneInputError',
    'SingularTransformError',
]
