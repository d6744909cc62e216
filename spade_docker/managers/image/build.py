"""镜像构建相关功能"""

import shlex
import subprocess
import sys
from pathlib import Path
from typing import BinaryIO, List, Optional

from loguru import logger

from ...constants import BUILD_ARG_KEYS
from ...utils import tee_stream
from .base import BuildArguments, BuilderFailedError
from .extract import extract_image_hash
from .record import RecordStore


class ImageBuilder:
    """镜像构建器类，构建成功后记录镜像ID"""

    def __init__(
        self,
        store: RecordStore,
        context_dir: str = ".",
        dockerfile: Optional[str] = None,
        docker: str = "docker",
        sink: Optional[BinaryIO] = None,
    ) -> None:
        """
        初始化镜像构建器

        Args:
            store: 镜像记录存储
            context_dir: 构建上下文目录
            dockerfile: Dockerfile路径，为None时使用构建目录下的Dockerfile
            docker: docker可执行文件
            sink: 构建输出的转发目标，默认为标准错误
        """
        self.store = store
        self.context_dir = Path(context_dir)
        self.dockerfile = dockerfile
        self.docker = docker
        self.sink = sink

    def build_command(self, args: BuildArguments) -> List[str]:
        """
        生成构建命令

        Args:
            args: 构建参数

        Returns:
            List[str]: 命令及参数
        """
        build_args = {
            BUILD_ARG_KEYS["architecture"]: args.architecture.value,
            BUILD_ARG_KEYS["zig_version"]: args.zig_version.value,
            BUILD_ARG_KEYS["spade_rev"]: args.spade_rev,
            BUILD_ARG_KEYS["swim_rev"]: args.swim_rev,
        }

        command = [self.docker, "build"]
        for key, value in build_args.items():
            command.extend(["--build-arg", f"{key}={value}"])
        if self.dockerfile:
            command.extend(["-f", self.dockerfile])
        command.append(str(self.context_dir))
        command.extend(["--progress", "plain"])
        return command

    def build(self, args: BuildArguments) -> str:
        """
        构建镜像并记录镜像ID

        只有成功提取到镜像ID后才会写入记录文件。

        Args:
            args: 构建参数

        Returns:
            str: 新镜像的ID

        Raises:
            BuilderFailedError: 无法启动构建工具或读取其输出时抛出
            ProtocolError: 输出中没有有效的镜像ID时抛出
            RecordIOError: 写入记录失败时抛出
        """
        logger.info(
            f"开始构建镜像 (架构: {args.architecture}, Zig: {args.zig_version}, "
            f"Spade: {args.spade_rev}, Swim: {args.swim_rev})"
        )

        output = self._build_with_progress(self.build_command(args))
        image_id = extract_image_hash(output)

        self.store.record(image_id)
        logger.success(f"镜像 {image_id} 构建成功并已记录")
        return image_id

    def _build_with_progress(self, command: List[str]) -> str:
        """
        运行构建命令，实时显示输出并返回完整输出

        Args:
            command: 构建命令

        Returns:
            str: 构建工具的标准错误输出

        Raises:
            BuilderFailedError: 无法启动构建工具或读取其输出时抛出
        """
        logger.debug(f"执行命令: {shlex.join(command)}")
        try:
            process = subprocess.Popen(command, stderr=subprocess.PIPE)
        except OSError as e:
            raise BuilderFailedError(f"无法启动构建工具 {command[0]}: {e}") from e

        sink = self.sink if self.sink is not None else sys.stderr.buffer
        try:
            output = tee_stream(process.stderr, sink)
        except UnicodeDecodeError as e:
            process.kill()
            raise BuilderFailedError("构建工具输出不是有效的UTF-8文本") from e
        except OSError as e:
            process.kill()
            raise BuilderFailedError(f"读取构建输出失败: {e}") from e
        finally:
            process.stderr.close()
            return_code = process.wait()

        if return_code != 0:
            logger.warning(f"构建工具退出码为 {return_code}")
        return output
