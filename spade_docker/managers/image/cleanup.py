"""镜像清理相关功能"""

from typing import List, Set

from loguru import logger

from ...constants import TOOL_NAME
from .backend import ImageBackend
from .base import ImageNotFoundError, MissingImagePolicy, PrunePolicy, PruneReport
from .labels import is_owned_image
from .record import RecordStore


class ImageCleaner:
    """镜像清理器类，删除记录中属于本工具的镜像"""

    def __init__(
        self,
        store: RecordStore,
        backend: ImageBackend,
        prune_policy: PrunePolicy = PrunePolicy.REMAINING,
        missing_image_policy: MissingImagePolicy = MissingImagePolicy.FORGET,
    ) -> None:
        """
        初始化镜像清理器

        Args:
            store: 镜像记录存储
            backend: 镜像检查与删除实现
            prune_policy: 删除成功后收缩记录的方式
            missing_image_policy: 镜像已不存在时的处理方式
        """
        self.store = store
        self.backend = backend
        self.prune_policy = prune_policy
        self.missing_image_policy = missing_image_policy

    def cleanup(self, dry_run: bool = False) -> PruneReport:
        """
        按记录顺序检查并删除镜像

        任何一个镜像检查失败都会中止整个清理。每成功删除一个镜像就立即
        更新记录文件，因此记录中不会残留已确认删除的镜像。

        Args:
            dry_run: 只检查，不删除也不修改记录

        Returns:
            PruneReport: 已删除、保留和已遗忘的镜像

        Raises:
            InspectionError: 检查镜像失败时抛出
            RecordEncodingError: 检查结果无法解析时抛出
            RecordIOError: 读写记录文件失败时抛出
        """
        logged_images = self.store.load()
        report: PruneReport = {"removed": [], "kept": [], "forgotten": []}
        gone: Set[str] = set()

        for index, image_id in enumerate(logged_images):
            if not image_id:
                continue
            if image_id in gone:
                continue

            try:
                metadata = self.backend.inspect(image_id)
            except ImageNotFoundError:
                if self.missing_image_policy is MissingImagePolicy.FAIL:
                    raise
                logger.warning(f"镜像 {image_id} 已不存在，将从记录中移除")
                report["forgotten"].append(image_id)
                gone.add(image_id)
                if not dry_run:
                    self._shrink(logged_images, index, gone)
                continue

            if not is_owned_image(metadata):
                logger.info(f"镜像 {image_id} 不是由 {TOOL_NAME} 构建的，跳过")
                report["kept"].append(image_id)
                continue

            if dry_run:
                report["removed"].append(image_id)
                continue

            if not self.backend.remove(image_id):
                logger.warning(f"删除镜像 {image_id} 失败，保留记录")
                report["kept"].append(image_id)
                continue

            logger.info(f"已删除镜像: {image_id}")
            report["removed"].append(image_id)
            gone.add(image_id)
            self._shrink(logged_images, index, gone)

        return report

    def _shrink(self, logged_images: List[str], index: int, gone: Set[str]) -> None:
        """
        删除成功后更新记录文件

        Args:
            logged_images: 清理开始时读取的记录
            index: 刚删除的镜像在记录中的位置
            gone: 已确认删除的镜像
        """
        if self.prune_policy is PrunePolicy.SUFFIX:
            candidates = logged_images[index + 1:]
        else:
            candidates = logged_images
        self.store.replace([image_id for image_id in candidates if image_id not in gone])
