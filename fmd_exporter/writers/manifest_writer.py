# File: writers/manifest_writer.py
# Purpose: 生成纹理清单（.fmi），记录网格名 → 纹理文件路径
# Notes:
# - 第一行固定为 model=<导出名>
# - marker_ / collisionconvex_ / collisioncomplex_ 前缀的网格不进入清单
# - 纹理路径模式关闭时写 <网格名>=UNKNOWN
# - 不转义：网格名包含 '=' 或换行会破坏清单（原样透传）

from typing import List, Optional

from ..config.constants import (
    EXCLUDED_MESH_PREFIXES,
    MANIFEST_CHANNEL_NORMAL,
    MANIFEST_CHANNEL_REFLECTIVITY,
    MANIFEST_CHANNEL_SEPARATOR,
    MANIFEST_CHANNEL_SPECULAR,
    MANIFEST_MODEL_KEY,
    MANIFEST_PLACEHOLDER,
)
from ..config.export_settings import ExportSettings
from ..core.schema import Material, Mesh
from ..utils.logger import Logger
from .audit_writer import ErrorCode


def is_manifest_excluded(mesh_name: str) -> bool:
    """标记点 / 碰撞体网格不参与纹理清单"""
    return mesh_name.startswith(EXCLUDED_MESH_PREFIXES)


class ManifestWriter:
    """
    ManifestWriter
    --------------
    按网格顺序累积清单行，最终文本由调用方决定写到哪里。

    使用方式:
        writer = ManifestWriter("hero", settings)
        writer.add_mesh(mesh, scene.get_material(mesh))
        text = writer.to_text()
    """

    def __init__(self, export_name: str, settings: ExportSettings,
                 logger: Optional[Logger] = None):
        self.export_name = export_name
        self.settings = settings
        self.logger = logger
        self.lines: List[str] = [f"{MANIFEST_MODEL_KEY}={export_name}"]

    def add_mesh(self, mesh: Mesh, material: Optional[Material]) -> int:
        """
        添加一个网格的清单行

        参数:
            mesh: 网格
            material: 网格引用的材质（索引无效时为 None）

        返回:
            新增的行数（0 ~ 4）
        """
        if is_manifest_excluded(mesh.name):
            return 0

        if not self.settings.use_model_texture:
            self.lines.append(f"{mesh.name}={MANIFEST_PLACEHOLDER}")
            return 1

        if material is None:
            if self.logger:
                self.logger.warning(f"材质索引 {mesh.material_index} 无效，跳过纹理",
                                    mesh.name, code=ErrorCode.MAT001)
            return 0

        before = len(self.lines)
        if material.texture_diffuse:
            self.lines.append(f"{mesh.name}={material.texture_diffuse}")
        channels = (
            (MANIFEST_CHANNEL_SPECULAR, material.texture_specular),
            (MANIFEST_CHANNEL_REFLECTIVITY, material.texture_reflection),
            (MANIFEST_CHANNEL_NORMAL, material.texture_normal),
        )
        for channel, path in channels:
            if path:
                self.lines.append(f"{mesh.name}{MANIFEST_CHANNEL_SEPARATOR}{channel}={path}")
        return len(self.lines) - before

    def to_text(self) -> str:
        """每行以换行结尾"""
        return "".join(line + "\n" for line in self.lines)

    def save(self, filepath: str) -> None:
        """保存清单（UTF-8）"""
        with open(filepath, "w", encoding="utf-8", newline="\n") as f:
            f.write(self.to_text())
