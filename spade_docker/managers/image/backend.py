"""镜像检查与删除

提供两种实现：调用 docker 命令行，或使用 Docker SDK。
"""

import json
from typing import Any, Dict, Optional, Protocol

from docker.client import DockerClient
from docker.errors import DockerException, ImageNotFound
from loguru import logger

from ...utils import run_command
from ..base_manager import BaseManager
from .base import ImageNotFoundError, InspectionError, RecordEncodingError, RecordIOError

# docker 与 podman 的镜像不存在提示
MISSING_IMAGE_MARKERS = ("no such image", "image not known")


class ImageBackend(Protocol):
    """镜像检查与删除协议"""

    def inspect(self, image_id: str) -> Any:
        """返回单个镜像的元数据"""
        ...

    def remove(self, image_id: str) -> bool:
        """强制删除镜像，返回是否成功"""
        ...


class CliImageBackend:
    """通过docker命令行检查和删除镜像"""

    def __init__(self, docker: str = "docker") -> None:
        """
        Args:
            docker: docker可执行文件
        """
        self.docker = docker

    def inspect(self, image_id: str) -> Any:
        """
        执行 `docker image inspect` 并返回数组中的第一个元素

        数组为空时返回空字典，由归属判断视为不属于本工具。

        Args:
            image_id: 镜像ID

        Returns:
            镜像元数据

        Raises:
            ImageNotFoundError: 镜像不存在时抛出
            InspectionError: 命令执行失败时抛出
            RecordEncodingError: 输出不是有效的UTF-8或JSON时抛出
        """
        try:
            return_code, stdout, stderr = run_command(
                [self.docker, "image", "inspect", image_id], check=False, text=False
            )
        except OSError as e:
            raise InspectionError(f"无法执行 {self.docker} image inspect: {e}") from e

        if return_code != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            if any(marker in message.lower() for marker in MISSING_IMAGE_MARKERS):
                raise ImageNotFoundError(f"镜像不存在: {image_id}")
            raise InspectionError(f"检查镜像 {image_id} 失败: {message}")

        try:
            document = json.loads(stdout.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise RecordEncodingError(f"docker image inspect 输出不是有效的UTF-8文本: {image_id}") from e
        except json.JSONDecodeError as e:
            raise RecordEncodingError(f"无法解析镜像 {image_id} 的检查结果: {e}") from e

        if not isinstance(document, list):
            raise RecordEncodingError(f"镜像 {image_id} 的检查结果不是数组")
        if not document:
            return {}
        return document[0]

    def remove(self, image_id: str) -> bool:
        """
        执行 `docker rmi -f`，只根据返回码判断是否成功

        Raises:
            RecordIOError: 无法执行命令时抛出
        """
        try:
            return_code, stdout, stderr = run_command(
                [self.docker, "rmi", "-f", image_id], check=False
            )
        except OSError as e:
            raise RecordIOError(f"无法执行 {self.docker} rmi: {e}") from e

        if return_code != 0:
            logger.debug(f"docker rmi 输出: {stderr.strip()}")
            return False
        return True


class SdkImageBackend(BaseManager):
    """通过Docker SDK检查和删除镜像"""

    def __init__(self, docker_client: Optional[DockerClient] = None) -> None:
        try:
            super().__init__(docker_client)
        except DockerException as e:
            raise InspectionError(f"无法连接到Docker守护进程: {e}") from e

    def inspect(self, image_id: str) -> Dict[str, Any]:
        try:
            return self.docker_client.images.get(image_id).attrs
        except ImageNotFound as e:
            raise ImageNotFoundError(f"镜像不存在: {image_id}") from e
        except DockerException as e:
            raise InspectionError(f"检查镜像 {image_id} 失败: {e}") from e

    def remove(self, image_id: str) -> bool:
        try:
            self.docker_client.images.remove(image_id, force=True)
            return True
        except DockerException as e:
            logger.debug(f"删除镜像 {image_id} 失败: {e}")
            return False
