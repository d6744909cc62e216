"""镜像记录相关功能模块

该子包包含构建记录相关的各个功能模块，如记录存储、镜像ID提取、构建和清理等。
"""

from .base import (
    Architecture,
    BuildArguments,
    BuilderFailedError,
    ImageNotFoundError,
    InspectionError,
    InvalidValueError,
    MissingImagePolicy,
    ProtocolError,
    PrunePolicy,
    PruneReport,
    RecordEncodingError,
    RecordIOError,
    SpadeDockerError,
    ZigVersion,
)
from .record import RecordStore, StoreLocation
from .extract import extract_image_hash
from .labels import is_owned_image
from .backend import CliImageBackend, ImageBackend, SdkImageBackend
from .build import ImageBuilder
from .cleanup import ImageCleaner

__all__ = [
    "Architecture",
    "BuildArguments",
    "BuilderFailedError",
    "ImageNotFoundError",
    "InspectionError",
    "InvalidValueError",
    "MissingImagePolicy",
    "ProtocolError",
    "PrunePolicy",
    "PruneReport",
    "RecordEncodingError",
    "RecordIOError",
    "SpadeDockerError",
    "ZigVersion",
    "RecordStore",
    "StoreLocation",
    "extract_image_hash",
    "is_owned_image",
    "CliImageBackend",
    "ImageBackend",
    "SdkImageBackend",
    "ImageBuilder",
    "ImageCleaner",
]
