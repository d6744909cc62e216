"""从构建输出中提取镜像ID"""

import string

from ...constants import ERROR_MESSAGES, IMAGE_ID_PREFIX, IMAGE_WRITTEN_MARKER
from .base import ProtocolError


def extract_image_hash(output: str) -> str:
    """
    从 `docker build --progress plain` 的输出中提取镜像ID

    使用最后一行包含写入镜像标记的输出，取其中第一个 `sha256:` 前缀的片段。

    Args:
        output: 构建工具的完整输出

    Returns:
        str: 去掉 `sha256:` 前缀的镜像ID

    Raises:
        ProtocolError: 没有写入镜像或镜像引用格式错误时抛出
    """
    marker_line = None
    for line in output.splitlines():
        if IMAGE_WRITTEN_MARKER in line:
            marker_line = line

    if marker_line is None:
        raise ProtocolError(ERROR_MESSAGES["no_image"])

    for token in marker_line.split():
        token = token.strip()
        if not token.startswith(IMAGE_ID_PREFIX):
            continue
        image_id = token[len(IMAGE_ID_PREFIX):]
        if image_id and all(c in string.hexdigits for c in image_id):
            return image_id
        break

    raise ProtocolError(ERROR_MESSAGES["malformed_reference"])
