"""镜像记录文件管理

记录文件每行一个镜像ID，没有文件头也没有校验。所有写入都通过
临时文件加原子重命名完成，读者只会看到旧内容或新内容。

注意：不提供跨进程锁，同一时间只能运行一个 build 或 clean。
"""

import os
from pathlib import Path
from typing import List, NamedTuple

from loguru import logger

from ...constants import DEFAULT_FILES, ERROR_MESSAGES
from .base import RecordEncodingError, RecordIOError


class StoreLocation(NamedTuple):
    """记录文件所在位置"""

    data_dir: Path
    record_file: str = DEFAULT_FILES["record_file"]
    temp_file: str = DEFAULT_FILES["temp_record_file"]

    @classmethod
    def from_data_dir(cls, data_dir) -> "StoreLocation":
        return cls(Path(data_dir))

    @property
    def record_path(self) -> Path:
        return self.data_dir / self.record_file

    @property
    def temp_path(self) -> Path:
        return self.data_dir / self.temp_file


class RecordStore:
    """镜像记录存储类"""

    def __init__(self, location: StoreLocation) -> None:
        """
        初始化记录存储

        Args:
            location: 记录文件位置
        """
        self.location = location

    def ensure_location(self) -> None:
        """
        创建数据目录（如果不存在）

        Raises:
            RecordIOError: 创建失败时抛出
        """
        try:
            self.location.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RecordIOError(ERROR_MESSAGES["data_dir"].format(self.location.data_dir, e)) from e

    def load(self) -> List[str]:
        """
        读取全部记录

        文件不存在或为空时返回空列表。按换行符切分，不去除末尾的空元素。

        Returns:
            List[str]: 镜像ID列表

        Raises:
            RecordIOError: 读取失败时抛出
            RecordEncodingError: 文件不是有效的UTF-8文本时抛出
        """
        path = self.location.record_path
        if not path.exists():
            logger.debug(f"记录文件不存在: {path}")
            return []

        try:
            data = path.read_bytes()
        except OSError as e:
            raise RecordIOError(ERROR_MESSAGES["record_read"].format(path, e)) from e

        try:
            contents = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RecordEncodingError(ERROR_MESSAGES["record_decode"].format(path)) from e

        if not contents:
            return []
        return contents.split("\n")

    def replace(self, log: List[str]) -> None:
        """
        用给定记录整体替换记录文件

        先写入临时文件，再原子重命名到正式路径。写入失败时正式文件保持不变；
        重命名失败时临时文件可能残留。

        Args:
            log: 新的镜像ID列表

        Raises:
            RecordIOError: 写入或重命名失败时抛出
        """
        temp_path = self.location.temp_path
        record_path = self.location.record_path

        try:
            with open(temp_path, "w", encoding="utf-8", newline="") as f:
                f.write("\n".join(log))
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise RecordIOError(ERROR_MESSAGES["record_write"].format(temp_path, e)) from e

        try:
            os.replace(temp_path, record_path)
        except OSError as e:
            raise RecordIOError(
                ERROR_MESSAGES["record_rename"].format(temp_path, record_path, e)
            ) from e

        self._sync_directory()

        logger.debug(f"记录文件已更新: {record_path} ({len(log)} 条)")

    def _sync_directory(self) -> None:
        """刷新数据目录，使重命名落盘；平台不支持时跳过"""
        try:
            fd = os.open(self.location.data_dir, os.O_RDONLY)
        except OSError as e:
            logger.debug(f"无法打开数据目录: {e}")
            return
        try:
            os.fsync(fd)
        except OSError as e:
            logger.debug(f"无法刷新数据目录: {e}")
        finally:
            os.close(fd)

    @staticmethod
    def append_if_absent(log: List[str], image_id: str) -> List[str]:
        """
        追加镜像ID，已存在时原样返回

        不会持久化，调用方需要再调用 replace。

        Args:
            log: 当前记录
            image_id: 镜像ID

        Returns:
            List[str]: 新的记录
        """
        if image_id in log:
            return log
        return [*log, image_id]

    def record(self, image_id: str) -> List[str]:
        """读取、追加并保存一条镜像记录"""
        log = self.append_if_absent(self.load(), image_id)
        self.replace(log)
        return log
