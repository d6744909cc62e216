"""Spade交叉编译镜像构建工具包"""

# 导入loguru并配置logger
from loguru import logger

from .utils import configure_logging

configure_logging()

# 导入其他模块
from .cli import app, main

__version__ = "0.1.0"

__all__ = [
    "logger",
    "app",
    "main",
]
