# File: utils/file_manager.py
# Purpose: 统一文件管理
# Notes:
# - 输出路径计算（.fmd / .fmi 与输入同目录同名）
# - 原子写入：先写同目录临时文件，成功后 os.replace，失败时删除临时文件
# - .fmd 与 .fmi 一起提交：两个临时文件都写完后才替换目标文件
# - 已存在的目标文件在新文件写完之前不会被删除

import os
import tempfile
from typing import Dict, List, Tuple


class FileManager:
    """
    文件管理器

    提供统一的文件操作接口
    """

    @staticmethod
    def ensure_directory(file_path: str) -> None:
        """
        确保目录存在

        参数:
            file_path: 文件路径
        """
        directory = os.path.dirname(file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory, exist_ok=True)

    @staticmethod
    def get_file_name_without_extension(file_path: str) -> str:
        """
        获取不带扩展名的文件名（用作导出名）

        参数:
            file_path: 文件路径

        返回:
            不带目录与扩展名的文件名
        """
        return os.path.splitext(os.path.basename(file_path))[0]

    @staticmethod
    def replace_extension(file_path: str, extension: str) -> str:
        """
        替换扩展名

        参数:
            file_path: 输入路径，如 models/hero.dae
            extension: 新扩展名（包含点号），如 .fmd

        返回:
            models/hero.fmd
        """
        return os.path.splitext(file_path)[0] + extension

    @staticmethod
    def _stage(file_path: str, data: bytes) -> str:
        """
        在目标目录写入临时文件（flush + fsync），返回临时文件路径

        写入失败时删除临时文件并继续抛出异常
        """
        FileManager.ensure_directory(file_path)
        directory = os.path.dirname(os.path.abspath(file_path))
        fd, temp_path = tempfile.mkstemp(
            prefix=f".{os.path.basename(file_path)}.", suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
        except BaseException:
            FileManager.remove_file(temp_path)
            raise
        return temp_path

    @staticmethod
    def atomic_write_all(contents: Dict[str, bytes]) -> None:
        """
        多个文件一起原子写入

        所有临时文件都写完后才依次替换目标文件；任一文件写入失败时，
        已写出的临时文件全部删除，所有目标文件保持原样。

        参数:
            contents: 目标路径 → 文件内容
        """
        staged: List[Tuple[str, str]] = []
        try:
            for file_path, data in contents.items():
                staged.append((FileManager._stage(file_path, data), file_path))
        except BaseException:
            for temp_path, _ in staged:
                FileManager.remove_file(temp_path)
            raise
        for temp_path, file_path in staged:
            os.replace(temp_path, file_path)

    @staticmethod
    def atomic_write_bytes(file_path: str, data: bytes) -> None:
        """原子写入二进制数据"""
        FileManager.atomic_write_all({file_path: data})

    @staticmethod
    def remove_file(file_path: str) -> bool:
        """
        删除文件

        参数:
            file_path: 文件路径

        返回:
            是否删除成功
        """
        try:
            if os.path.exists(file_path):
                os.remove(file_path)
                return True
            return False
        except OSError:
            return False
