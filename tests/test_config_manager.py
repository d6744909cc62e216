"""配置管理器测试"""

import json

import pytest

from spade_docker.constants import DEFAULT_CONFIG
from spade_docker.managers.config_manager import ConfigError, ConfigManager


def write_config(tmp_path, content):
    (tmp_path / "config.json").write_text(
        content if isinstance(content, str) else json.dumps(content), encoding="utf-8"
    )


class TestConfigManager:
    def test_defaults_without_file(self, tmp_path):
        config = ConfigManager(tmp_path).load_config()

        assert config == DEFAULT_CONFIG

    def test_defaults_are_not_shared(self, tmp_path):
        manager = ConfigManager(tmp_path)
        manager.update_config({"clean": {"backend": "sdk"}})

        assert DEFAULT_CONFIG["clean"]["backend"] == "cli"

    def test_partial_file_is_merged(self, tmp_path):
        write_config(tmp_path, {"clean": {"prune_policy": "suffix"}, "build": {"dockerfile": "Dockerfile.zig"}})

        config = ConfigManager(tmp_path).load_config()

        assert config["clean"]["prune_policy"] == "suffix"
        assert config["clean"]["missing_image_policy"] == "forget"
        assert config["build"]["dockerfile"] == "Dockerfile.zig"
        assert config["build"]["docker"] == "docker"

    def test_invalid_json(self, tmp_path):
        write_config(tmp_path, "{not json")

        with pytest.raises(ConfigError):
            ConfigManager(tmp_path).load_config()

    def test_root_must_be_object(self, tmp_path):
        write_config(tmp_path, [1, 2])

        with pytest.raises(ConfigError):
            ConfigManager(tmp_path).load_config()

    @pytest.mark.parametrize(
        "content",
        [
            {"clean": {"prune_policy": "everything"}},
            {"clean": {"missing_image_policy": "ignore"}},
            {"clean": {"backend": "podman"}},
            {"build": {"context": 3}},
            {"build": "docker"},
        ],
    )
    def test_invalid_values(self, tmp_path, content):
        write_config(tmp_path, content)

        with pytest.raises(ConfigError):
            ConfigManager(tmp_path).load_config()
