"""镜像管理器类 - 门面模式实现"""

from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from ..constants import DefaultConfig
from .image.backend import CliImageBackend, ImageBackend, SdkImageBackend
from .image.base import BuildArguments, MissingImagePolicy, PrunePolicy, PruneReport
from .image.build import ImageBuilder
from .image.cleanup import ImageCleaner
from .image.record import RecordStore, StoreLocation


class ImageManager:
    """镜像管理器类，用于构建、清理和列出记录的镜像"""

    def __init__(
        self,
        data_dir: Union[str, Path],
        config: DefaultConfig,
        backend: Optional[ImageBackend] = None,
    ) -> None:
        """
        初始化镜像管理器

        Args:
            data_dir: 数据目录
            config: 工具配置
            backend: 镜像检查与删除实现，为None时按配置创建
        """
        self.config = config
        self.store = RecordStore(StoreLocation.from_data_dir(data_dir))

        build_config = config["build"]
        self.builder = ImageBuilder(
            self.store,
            context_dir=build_config["context"],
            dockerfile=build_config["dockerfile"],
            docker=build_config["docker"],
        )
        self._backend = backend

    @property
    def backend(self) -> ImageBackend:
        """按需创建镜像后端，构建时不需要连接Docker"""
        if self._backend is None:
            if self.config["clean"]["backend"] == "sdk":
                self._backend = SdkImageBackend()
            else:
                self._backend = CliImageBackend(self.config["build"]["docker"])
            logger.debug(f"使用镜像后端: {self.config['clean']['backend']}")
        return self._backend

    def build_image(self, args: BuildArguments) -> str:
        """
        构建镜像并记录

        Args:
            args: 构建参数

        Returns:
            str: 新镜像的ID
        """
        return self.builder.build(args)

    def cleanup_images(self, dry_run: bool = False) -> PruneReport:
        """
        清理记录中属于本工具的镜像

        Args:
            dry_run: 只检查，不删除

        Returns:
            PruneReport: 清理结果
        """
        clean_config = self.config["clean"]
        cleaner = ImageCleaner(
            self.store,
            self.backend,
            prune_policy=PrunePolicy.parse(clean_config["prune_policy"]),
            missing_image_policy=MissingImagePolicy.parse(clean_config["missing_image_policy"]),
        )
        return cleaner.cleanup(dry_run=dry_run)

    def list_images(self) -> List[str]:
        """返回记录中的镜像ID，忽略空行"""
        return [image_id for image_id in self.store.load() if image_id]
