"""镜像管理器模块

该模块包含构建和清理镜像所需的管理器类。
"""

from .image_manager import ImageManager
from .config_manager import ConfigError, ConfigManager
from .base_manager import BaseManager

__all__ = [
    "BaseManager",
    "ImageManager",
    "ConfigManager",
    "ConfigError",
]
