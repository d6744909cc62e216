"""配置管理器类"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Tuple, Type, Union, cast

from loguru import logger

from ..constants import DEFAULT_CONFIG, DEFAULT_FILES, ERROR_MESSAGES, IMAGE_BACKENDS, DefaultConfig
from .image.base import (
    InvalidValueError,
    MissingImagePolicy,
    PrunePolicy,
    SpadeDockerError,
)


class ConfigError(SpadeDockerError):
    """配置错误"""

    pass


ValueTypes = Union[Type[Any], Tuple[Type[Any], ...]]
ValidationStructure = Dict[str, Union[ValueTypes, 'ValidationStructure']]

def generate_validation_structure(config_template: Dict[str, Any]) -> ValidationStructure:
    """
    从配置模板生成验证结构

    Args:
        config_template: 配置模板

    Returns:
        ValidationStructure: 验证结构
    """
    validation_structure: ValidationStructure = {}

    for key, value in config_template.items():
        if isinstance(value, dict):
            validation_structure[key] = generate_validation_structure(value)
        elif value is None:
            validation_structure[key] = (str, type(None))
        else:
            validation_structure[key] = type(value)

    return validation_structure


def _type_name(value_type: ValueTypes) -> str:
    if isinstance(value_type, tuple):
        return " 或 ".join(t.__name__ for t in value_type)
    return value_type.__name__


class ConfigManager:
    """配置管理器类，读取数据目录下的config.json"""

    config: DefaultConfig
    REQUIRED_CONFIG_FIELDS: ValidationStructure

    def __init__(self, data_dir: Union[str, Path]) -> None:
        """
        初始化配置管理器

        Args:
            data_dir: 数据目录
        """
        self.config_file = Path(data_dir) / DEFAULT_FILES["config_file"]
        self.config = cast(DefaultConfig, copy.deepcopy(DEFAULT_CONFIG))

        # 初始化验证结构
        self.REQUIRED_CONFIG_FIELDS = generate_validation_structure(cast(Dict[str, Any], DEFAULT_CONFIG))

    def load_config(self) -> DefaultConfig:
        """
        加载配置文件，合并到默认配置之上

        配置文件不存在时使用默认配置。

        Returns:
            DefaultConfig: 加载的配置

        Raises:
            ConfigError: 配置加载或验证失败时抛出
        """
        if not self.config_file.exists():
            logger.debug(f"配置文件不存在，使用默认配置: {self.config_file}")
            return self.config

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"加载配置文件失败: {self.config_file}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigError(ERROR_MESSAGES["config_validation"].format("配置文件的根节点应为对象"))

        self.update_config(loaded)
        return self.config

    def update_config(self, config_updates: Dict[str, Any]) -> DefaultConfig:
        """
        更新配置

        Args:
            config_updates: 要更新的配置项

        Returns:
            DefaultConfig: 更新后的配置

        Raises:
            ConfigError: 配置验证失败时抛出
        """

        # 递归更新配置
        def recursive_update(current, updates):
            for key, value in updates.items():
                if key in current and isinstance(value, dict) and isinstance(current[key], dict):
                    recursive_update(current[key], value)
                else:
                    current[key] = value

        recursive_update(self.config, config_updates)

        # 验证新配置
        self.validate_config()

        return self.config

    def validate_config(self) -> None:
        """
        验证配置的完整性和正确性

        Raises:
            ConfigError: 配置验证失败时抛出
        """
        try:
            self._validate_config_structure(cast(Dict[str, Any], self.config), self.REQUIRED_CONFIG_FIELDS)
            self._validate_choices()
        except (ConfigError, InvalidValueError) as e:
            raise ConfigError(ERROR_MESSAGES["config_validation"].format(e)) from e

    def _validate_config_structure(self, config: Dict[str, Any], required: ValidationStructure) -> None:
        """
        递归验证配置结构

        Args:
            config: 要验证的配置
            required: 必需的配置结构

        Raises:
            ConfigError: 配置结构验证失败时抛出
        """
        for key, value_type in required.items():
            if key not in config:
                raise ConfigError(f"缺少必需的配置项: {key}")

            if isinstance(value_type, dict):
                if not isinstance(config[key], dict):
                    raise ConfigError(f"配置项类型错误: {key} 应为字典")
                self._validate_config_structure(config[key], value_type)
            elif not isinstance(config[key], value_type):
                raise ConfigError(f"配置项类型错误: {key} 应为 {_type_name(value_type)}")

    def _validate_choices(self) -> None:
        """验证取值受限的配置项"""
        clean = self.config["clean"]
        if clean["backend"] not in IMAGE_BACKENDS:
            raise ConfigError(
                f"无效的镜像后端 '{clean['backend']}'，可选值: {', '.join(IMAGE_BACKENDS)}"
            )
        PrunePolicy.parse(clean["prune_policy"])
        MissingImagePolicy.parse(clean["missing_image_policy"])

