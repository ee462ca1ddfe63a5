# -*- coding: utf-8 -*-
"""
导出配置数据类
将命令行修饰符转换为内部配置对象，显式传入导出流程（不使用全局开关）
"""

from typing import Optional

from .constants import (
    DEFAULT_WEIGHT_TOLERANCE,
    MODIFIER_PRETRANSFORM,
    MODIFIER_TEXTURE,
)


class ExportSettings:
    """全局导出配置"""

    def __init__(self,
                 pre_transform: bool = False,
                 use_model_texture: bool = False,
                 weight_tolerance: float = DEFAULT_WEIGHT_TOLERANCE,
                 write_audit: bool = False,
                 verbose: bool = True):
        self.pre_transform = pre_transform  # 按同名节点烘焙变换到顶点/法线
        self.use_model_texture = use_model_texture  # 清单中写入真实纹理路径（否则为 UNKNOWN）
        self.weight_tolerance = weight_tolerance  # 权重和偏离 1.0 的告警阈值
        self.write_audit = write_audit
        self.verbose = verbose

    @classmethod
    def from_modifier(cls, modifier: Optional[str], **kwargs) -> "ExportSettings":
        """
        从命令行修饰符创建配置对象

        参数:
            modifier: 可选的修饰符，如 "pretrans"、"texture"、"pretranstexture"

        返回:
            ExportSettings
        """
        token = (modifier or "").lower()
        return cls(
            pre_transform=MODIFIER_PRETRANSFORM in token,
            use_model_texture=MODIFIER_TEXTURE in token,
            **kwargs
        )

    def __repr__(self) -> str:
        return (f"ExportSettings(pre_transform={self.pre_transform}, "
                f"use_model_texture={self.use_model_texture}, "
                f"weight_tolerance={self.weight_tolerance}, "
                f"write_audit={self.write_audit}, verbose={self.verbose})")
