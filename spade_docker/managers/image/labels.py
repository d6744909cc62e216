"""镜像归属判断"""

from typing import Any

from ...constants import OWNERSHIP_LABEL_KEY, OWNERSHIP_LABEL_VALUE


def is_owned_image(metadata: Any) -> bool:
    """
    判断镜像是否由本工具构建

    缺少标签、类型不对或取值不同都视为不属于本工具，不会抛出异常。

    Args:
        metadata: 单个镜像的检查结果，或 `docker image inspect` 输出的数组

    Returns:
        bool: 是否带有 tool=spade-docker 标签
    """
    if isinstance(metadata, list):
        if not metadata:
            return False
        metadata = metadata[0]

    if not isinstance(metadata, dict):
        return False
    config = metadata.get("Config")
    if not isinstance(config, dict):
        return False
    labels = config.get("Labels")
    if not isinstance(labels, dict):
        return False

    value = labels.get(OWNERSHIP_LABEL_KEY)
    return isinstance(value, str) and value == OWNERSHIP_LABEL_VALUE
