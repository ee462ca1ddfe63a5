# File: export_processor.py
# Purpose: 导出处理器，串联几何变换、网格/节点写入、纹理清单与压缩
# Notes:
# - 文件头 "FMD001" 不压缩，其后是 gzip 压缩的正文
# - 正文：根节点变换 → 网格数 → 网格记录 → 节点树
# - 网格记录先缓冲，网格数写实际写出的记录数（无跳过时与旧版逐字节一致）
# - gzip mtime 固定为 0，相同输入重复导出结果逐字节一致
# - 纹理清单文本随 ExportResult 返回；export_to_files 把模型与清单一起提交

import gzip
import io
from typing import BinaryIO, Optional

from .config.constants import FMD_MAGIC, GZIP_MTIME
from .config.export_settings import ExportSettings
from .core.errors import ExportIOError, SingularTransformError
from .core.io.binary_writer import BinaryWriter
from .core.schema import ExportResult, Scene
from .core.transform import GeometryTransformer
from .utils.file_manager import FileManager
from .utils.logger import Logger
from .writers.audit_writer import ErrorCode
from .writers.manifest_writer import ManifestWriter
from .writers.mesh_writer import MeshWriter
from .writers.node_writer import NodeWriter


def gzip_bytes(data: bytes) -> bytes:
    """gzip 压缩（固定 mtime，结果可复现）"""
    return gzip.compress(data, mtime=GZIP_MTIME)


class ExportProcessor:
    """
    统一导出处理器

    使用方式:
        processor = ExportProcessor(ExportSettings(pre_transform=True), Logger())
        result = processor.export_to_files("hero", scene, "models/hero.fmd", "models/hero.fmi")
    """

    def __init__(self, settings: Optional[ExportSettings] = None, logger: Optional[Logger] = None):
        """
        初始化导出处理器

        参数:
            settings: 导出设置
            logger: 日志记录器
        """
        self.settings = settings or ExportSettings()
        self.logger = logger or Logger(verbose=self.settings.verbose)

    def encode_body(self, export_name: str, scene: Scene):
        """
        编码未压缩正文并生成纹理清单

        参数:
            export_name: 导出名（清单第一行 model=<导出名>）
            scene: 场景

        返回:
            (正文字节, ExportResult)
        """
        settings = self.settings
        transformer = GeometryTransformer(scene, settings)
        manifest = ManifestWriter(export_name, settings, self.logger)
        result = ExportResult(manifest="", bounds=transformer.bounds)

        mesh_buffer = io.BytesIO()
        mesh_writer = MeshWriter(BinaryWriter(mesh_buffer), transformer, settings, self.logger)

        self.logger.info(f"写入 {len(scene.meshes)} 个网格...")
        for mesh in scene.meshes:
            self.logger.info(f"写入网格: {mesh.name}")
            transform = transformer.mesh_transform(mesh)
            if transform is None:
                self.logger.warning("找不到预变换节点，跳过网格", mesh.name, code=ErrorCode.NODE001)
                result.skipped_meshes.append(mesh.name)
                continue
            manifest.add_mesh(mesh, scene.get_material(mesh))
            try:
                mesh_writer.write(mesh, transform)
            except SingularTransformError as e:
                self.logger.error(str(e), mesh.name, code=ErrorCode.GEO003)
                raise
            result.written_meshes.append(mesh.name)

        bounds = transformer.bounds
        self.logger.info(
            f"模型包围盒: Min{bounds.min} Max{bounds.max}, 尺寸 {bounds.size}"
        )

        body = io.BytesIO()
        binw = BinaryWriter(body)
        binw.write_matrix4x4(scene.root.transform)
        binw.write_int32(len(result.written_meshes))
        binw.write_bytes(mesh_buffer.getvalue())
        node_writer = NodeWriter(binw, self.logger)
        node_writer.write(scene.root)
        self.logger.info(f"写入 {result.mesh_count} 个网格, {node_writer.node_count} 个节点")

        result.manifest = manifest.to_text()
        return body.getvalue(), result

    def export(self, export_name: str, scene: Scene, out_stream: BinaryIO) -> ExportResult:
        """
        导出到任意二进制流：文件头 + gzip 正文

        参数:
            export_name: 导出名
            scene: 场景
            out_stream: 输出流

        返回:
            ExportResult（包含清单文本）
        """
        body, result = self.encode_body(export_name, scene)
        out_stream.write(FMD_MAGIC)
        out_stream.write(gzip_bytes(body))
        return result

    def export_bytes(self, export_name: str, scene: Scene):
        """
        导出为内存字节

        返回:
            (文件字节, ExportResult)
        """
        buffer = io.BytesIO()
        result = self.export(export_name, scene, buffer)
        return buffer.getvalue(), result

    def export_to_file(self, export_name: str, scene: Scene, output_path: str) -> ExportResult:
        """
        导出到文件（原子替换，失败时不留下半截文件）

        参数:
            export_name: 导出名
            scene: 场景
            output_path: .fmd 路径

        返回:
            ExportResult
        """
        data, result = self.export_bytes(export_name, scene)
        try:
            FileManager.atomic_write_bytes(output_path, data)
        except OSError as e:
            self.logger.error(f"写入失败: {e}", output_path, code=ErrorCode.IO001)
            raise ExportIOError(f"写入 {output_path} 失败: {e}") from e
        self.logger.info(f"已写入: {output_path} ({len(data)} 字节)")
        return result

    def export_to_files(self, export_name: str, scene: Scene,
                        model_path: str, manifest_path: str) -> ExportResult:
        """
        导出模型与纹理清单，两个文件一起提交

        任一文件写入失败时两个目标文件都保持原样

        参数:
            export_name: 导出名
            scene: 场景
            model_path: .fmd 路径
            manifest_path: .fmi 路径

        返回:
            ExportResult
        """
        data, result = self.export_bytes(export_name, scene)
        try:
            FileManager.atomic_write_all({
                model_path: data,
                manifest_path: result.manifest.encode("utf-8"),
            })
        except OSError as e:
            self.logger.error(f"写入失败: {e}", model_path, code=ErrorCode.IO001)
            raise ExportIOError(f"写入 {model_path} / {manifest_path} 失败: {e}") from e
        self.logger.info(f"已写入: {model_path} ({len(data)} 字节), {manifest_path}")
        return result
