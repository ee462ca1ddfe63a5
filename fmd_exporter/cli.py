# File: cli.py
# Purpose: 命令行入口：fmd-export <filename> [modifier]
# Notes:
# - 修饰符包含 "pretrans" 启用预变换模式，包含 "texture" 启用纹理路径模式（可合并）
# - 输出与输入同目录同名：<name>.fmd（模型）与 <name>.fmi（纹理清单）
# - 参数缺失或文件不存在时打印用法并返回，不产生任何输出文件
# - .fmd 与 .fmi 一起提交，任一写入失败时两者都保持原样

import argparse
import os
import sys
from typing import List, Optional

from .config.constants import EXT_AUDIT, EXT_MANIFEST, EXT_MODEL
from .config.export_settings import ExportSettings
from .core.errors import ExportError, SceneInputError
from .export_processor import ExportProcessor
from .utils.file_manager import FileManager
from .utils.logger import Logger
from .writers.audit_writer import AuditLogger, ErrorCode

PROG = "fmd-export"

USAGE_EXAMPLES = f"""\
For example: {PROG} modelname.dae
For example (2): {PROG} myfile.dae texture
For example (3): {PROG} somepath/somemodel.dae pretranstexture"""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog=PROG,
        usage=f"{PROG} <filename> ['pretrans']['texture']",
        description="Convert a 3D model into an FMD binary model (.fmd) and texture manifest (.fmi).",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("filename", nargs="?", help="input model file")
    ap.add_argument("modifier", nargs="?", default="",
                    help="'pretrans' and/or 'texture', may be combined (e.g. pretranstexture)")
    ap.add_argument("--audit", action="store_true", help=f"also write <name>{EXT_AUDIT}")
    ap.add_argument("--quiet", action="store_true", help="only print errors")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if not args.filename:
        ap.print_usage()
        print(USAGE_EXAMPLES)
        return 1
    if not os.path.isfile(args.filename):
        print("Invalid filename (does not exist).")
        ap.print_usage()
        return 1

    settings = ExportSettings.from_modifier(
        args.modifier, write_audit=args.audit, verbose=not args.quiet
    )
    audit = AuditLogger() if settings.write_audit else None
    logger = Logger(audit_logger=audit, verbose=settings.verbose)
    logger.info(f"预变换到动画节点 = {settings.pre_transform}")
    logger.info(f"使用文件纹理路径 = {settings.use_model_texture}")

    model_path = FileManager.replace_extension(args.filename, EXT_MODEL)
    manifest_path = FileManager.replace_extension(args.filename, EXT_MANIFEST)
    export_name = FileManager.get_file_name_without_extension(args.filename)

    # trimesh 导入较慢，仅在真正导出时加载
    from .providers.trimesh_provider import load_scene

    try:
        scene = load_scene(args.filename)
        processor = ExportProcessor(settings, logger)
        result = processor.export_to_files(export_name, scene, model_path, manifest_path)
        if result.skipped_meshes:
            logger.warning(f"跳过 {len(result.skipped_meshes)} 个网格: {', '.join(result.skipped_meshes)}")
    except SceneInputError as e:
        logger.error(str(e), args.filename, code=ErrorCode.INP001)
        return 1
    except ExportError as e:
        logger.error(str(e), args.filename)
        return 1
    finally:
        if audit is not None:
            audit_path = FileManager.replace_extension(args.filename, EXT_AUDIT)
            logger.info(audit.get_summary(), audit_path)
            audit.save(audit_path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
