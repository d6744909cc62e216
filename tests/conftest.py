"""
测试公共夹具

- 临时目录中的记录存储
- 可编程的镜像检查/删除后端
"""

from typing import Any, Dict, List, Optional

import pytest

from spade_docker.managers.image.base import ImageNotFoundError, InspectionError
from spade_docker.managers.image.record import RecordStore, StoreLocation

OWNED = {"Config": {"Labels": {"tool": "spade-docker"}}}
FOREIGN = {"Config": {"Labels": {"tool": "something-else"}}}


class FakeBackend:
    """按预设结果响应的镜像后端

    images 中值为 None 表示镜像不存在，值为异常实例时检查会抛出该异常。
    """

    def __init__(self, images: Dict[str, Any], removable: Optional[List[str]] = None) -> None:
        self.images = images
        self.removable = set(images) if removable is None else set(removable)
        self.inspected: List[str] = []
        self.removed: List[str] = []

    def inspect(self, image_id: str) -> Any:
        self.inspected.append(image_id)
        metadata = self.images.get(image_id)
        if metadata is None:
            raise ImageNotFoundError(f"镜像不存在: {image_id}")
        if isinstance(metadata, Exception):
            raise metadata
        return metadata

    def remove(self, image_id: str) -> bool:
        if image_id not in self.removable:
            return False
        self.removed.append(image_id)
        return True


@pytest.fixture
def location(tmp_path) -> StoreLocation:
    return StoreLocation.from_data_dir(tmp_path / "data")


@pytest.fixture
def store(location) -> RecordStore:
    record_store = RecordStore(location)
    record_store.ensure_location()
    return record_store


@pytest.fixture
def inspection_failure() -> InspectionError:
    return InspectionError("permission denied")
