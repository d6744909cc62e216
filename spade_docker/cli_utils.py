"""CLI工具模块，包含CLI命令行接口的辅助函数和类"""

import sys
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import typer
from loguru import logger

from .managers.config_manager import ConfigManager
from .managers.image.base import Architecture, InvalidValueError, SpadeDockerError, ZigVersion
from .managers.image_manager import ImageManager
from .utils import resolve_data_dir

F = TypeVar('F', bound=Callable[..., Any])


class ToolContext:
    """命令行上下文，保存全局选项"""

    def __init__(self, data_dir: Optional[str] = None) -> None:
        """
        初始化命令行上下文

        Args:
            data_dir: 命令行指定的数据目录
        """
        self._data_dir_override = data_dir
        self._data_dir: Optional[Path] = None

    @property
    def data_dir(self) -> Path:
        """获取数据目录"""
        if self._data_dir is None:
            self._data_dir = resolve_data_dir(self._data_dir_override)
        return self._data_dir


def parse_architecture_option(value: str) -> Architecture:
    """解析 --arch 选项"""
    try:
        return Architecture.parse(value)
    except InvalidValueError as e:
        raise typer.BadParameter(str(e))


def parse_zig_version_option(value: str) -> ZigVersion:
    """解析 --zig-version 选项"""
    try:
        return ZigVersion.parse(value)
    except InvalidValueError as e:
        raise typer.BadParameter(str(e))


def get_image_manager(ctx: typer.Context) -> ImageManager:
    """
    获取镜像管理器实例

    首次运行时会创建数据目录。

    Args:
        ctx: typer上下文

    Returns:
        ImageManager: 镜像管理器实例

    Raises:
        RecordIOError: 无法创建数据目录时抛出
        ConfigError: 配置文件无效时抛出
    """
    tool_ctx = ctx.obj if isinstance(ctx.obj, ToolContext) else ToolContext()
    data_dir = tool_ctx.data_dir
    logger.debug(f"数据目录: {data_dir}")

    config = ConfigManager(data_dir).load_config()
    image_manager = ImageManager(data_dir, config)
    image_manager.store.ensure_location()
    return image_manager


def exit_on_error(func: F) -> F:
    """
    捕获工具错误并以非0状态退出的装饰器

    Args:
        func: 被装饰的函数

    Returns:
        Callable: 装饰后的函数
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SpadeDockerError as e:
            logger.error(f"错误：{str(e)}")
            sys.exit(1)

    return wrapper  # type: ignore[return-value]
