"""常量配置模块"""

from typing import Dict, Optional, TypedDict

# 工具名称，同时也是镜像归属标签的值
TOOL_NAME: str = "spade-docker"

# 数据目录覆盖
DATA_DIR_ENV: str = "SPADE_DOCKER_DATA_DIR"

# 文件相关
class DefaultFiles(TypedDict):
    record_file: str
    temp_record_file: str
    config_file: str

DEFAULT_FILES: DefaultFiles = {
    "record_file": "hashes.txt",
    "temp_record_file": "hashes.temp.txt",
    "config_file": "config.json",
}

# 镜像归属标签
OWNERSHIP_LABEL_KEY: str = "tool"
OWNERSHIP_LABEL_VALUE: str = TOOL_NAME

# 构建输出协议
IMAGE_WRITTEN_MARKER: str = "writing image sha256:"
IMAGE_ID_PREFIX: str = "sha256:"

# 每次从构建输出读取的字节数
STREAM_CHUNK_SIZE: int = 1024

# 构建参数名
class BuildArgKeys(TypedDict):
    architecture: str
    zig_version: str
    spade_rev: str
    swim_rev: str

BUILD_ARG_KEYS: BuildArgKeys = {
    "architecture": "TARGET_PLATFORM",
    "zig_version": "ZIG_VERSION",
    "spade_rev": "SPADE_REV",
    "swim_rev": "SWIM_REV",
}

# 默认配置
class BuildConfig(TypedDict):
    context: str
    dockerfile: Optional[str]
    docker: str

class CleanConfig(TypedDict):
    backend: str
    prune_policy: str
    missing_image_policy: str

class DefaultConfig(TypedDict):
    build: BuildConfig
    clean: CleanConfig

DEFAULT_CONFIG: DefaultConfig = {
    "build": {
        "context": ".",
        "dockerfile": None,  # 使用构建目录下的Dockerfile
        "docker": "docker",
    },
    "clean": {
        "backend": "cli",  # cli 或 sdk
        "prune_policy": "remaining",
        "missing_image_policy": "forget",
    },
}

IMAGE_BACKENDS = ("cli", "sdk")

# 错误消息
ERROR_MESSAGES: Dict[str, str] = {
    "no_image": "no image produced",
    "malformed_reference": "malformed image reference",
    "record_read": "读取记录文件失败: {}: {}",
    "record_decode": "记录文件不是有效的UTF-8文本: {}",
    "record_write": "写入临时记录文件失败: {}: {}",
    "record_rename": "替换记录文件失败: {} -> {}: {}",
    "data_dir": "无法创建数据目录: {}: {}",
    "config_validation": "配置验证失败: {}",
}
