"""工具函数测试"""

import io
from pathlib import Path

import pytest

from spade_docker.utils import resolve_data_dir, tee_stream


class TestTeeStream:
    def test_forwards_and_captures(self):
        sink = io.BytesIO()

        output = tee_stream(io.BytesIO(b"line one\nline two\n"), sink, chunk_size=4)

        assert output == "line one\nline two\n"
        assert sink.getvalue() == b"line one\nline two\n"

    def test_multibyte_character_split_across_chunks(self):
        data = "构建完成\n".encode("utf-8")

        assert tee_stream(io.BytesIO(data), io.BytesIO(), chunk_size=1) == "构建完成\n"

    def test_empty_stream(self):
        assert tee_stream(io.BytesIO(b""), io.BytesIO()) == ""

    def test_invalid_utf8_is_still_forwarded(self):
        sink = io.BytesIO()

        with pytest.raises(UnicodeDecodeError):
            tee_stream(io.BytesIO(b"ok\n\xff"), sink)

        assert sink.getvalue() == b"ok\n\xff"

    def test_truncated_multibyte_at_end(self):
        with pytest.raises(UnicodeDecodeError):
            tee_stream(io.BytesIO("构".encode("utf-8")[:2]), io.BytesIO())


class TestResolveDataDir:
    def test_override_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SPADE_DOCKER_DATA_DIR", "/elsewhere")

        assert resolve_data_dir(str(tmp_path)) == tmp_path

    def test_environment_variable(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SPADE_DOCKER_DATA_DIR", str(tmp_path))

        assert resolve_data_dir() == tmp_path

    def test_platform_default(self, monkeypatch):
        monkeypatch.delenv("SPADE_DOCKER_DATA_DIR", raising=False)

        data_dir = resolve_data_dir()

        assert isinstance(data_dir, Path)
        assert data_dir.name == "spade-docker"
