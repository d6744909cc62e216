"""工具函数模块"""

import codecs
import os
import shlex
import subprocess
from pathlib import Path
from typing import Any, BinaryIO, List, Optional, Sequence, Tuple

import platformdirs
from loguru import logger

from .constants import DATA_DIR_ENV, STREAM_CHUNK_SIZE, TOOL_NAME

LOG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"


def run_command(args: Sequence[str], check: bool = True, text: bool = True) -> Tuple[int, Any, Any]:
    """
    运行命令并返回结果

    Args:
        args: 命令及参数
        check: 是否检查返回码
        text: 是否以文本方式返回输出，为False时返回原始字节

    Returns:
        (返回码, 标准输出, 标准错误)

    Raises:
        OSError: 无法启动命令时抛出
        subprocess.CalledProcessError: check为True且返回码非0时抛出
    """
    command = shlex.join(args)
    logger.debug(f"执行命令: {command}")

    process = subprocess.Popen(
        list(args), stdout=subprocess.PIPE, stderr=subprocess.PIPE, universal_newlines=text
    )

    # 获取输出
    stdout, stderr = process.communicate()
    return_code = process.returncode

    # 检查返回码
    if check and return_code != 0:
        logger.error(f"命令执行失败: {command}")
        logger.error(f"错误输出: {stderr}")
        raise subprocess.CalledProcessError(return_code, command, stdout, stderr)

    return return_code, stdout, stderr


def tee_stream(stream: BinaryIO, sink: BinaryIO, chunk_size: int = STREAM_CHUNK_SIZE) -> str:
    """
    边读边转发输出流，同时累积为文本

    每读到一块数据就立即写入sink并刷新，读到空块（流结束）才返回。
    跨块的多字节字符由增量解码器处理。

    Args:
        stream: 要读取的字节流
        sink: 实时转发的目标
        chunk_size: 每次最多读取的字节数

    Returns:
        str: 读取到的全部文本

    Raises:
        OSError: 读取或写入失败时抛出
        UnicodeDecodeError: 数据不是有效的UTF-8时抛出
    """
    decoder = codecs.getincrementaldecoder("utf-8")()
    read = getattr(stream, "read1", stream.read)
    captured: List[str] = []

    while True:
        chunk = read(chunk_size)
        if not chunk:
            break
        sink.write(chunk)
        sink.flush()
        captured.append(decoder.decode(chunk))

    captured.append(decoder.decode(b"", final=True))
    return "".join(captured)


def resolve_data_dir(override: Optional[str] = None) -> Path:
    """
    确定数据目录

    优先级：命令行参数 > 环境变量 > 系统用户数据目录

    Args:
        override: 命令行指定的目录

    Returns:
        Path: 数据目录
    """
    if override:
        return Path(override).expanduser()

    env_dir = os.environ.get(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()

    return Path(platformdirs.user_data_dir(TOOL_NAME, appauthor=False))


def configure_logging(level: str = "INFO") -> None:
    """
    配置loguru输出

    Args:
        level: 日志级别
    """
    # 移除已有处理器
    logger.remove()
    # 添加标准输出处理器
    logger.add(
        sink=lambda msg: print(msg, end=""),  # 使用标准输出
        format=LOG_FORMAT,
        colorize=True,
        level=level,
    )
