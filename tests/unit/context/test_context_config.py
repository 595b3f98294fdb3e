from pathlib import Path

import pytest
from pydantic import ValidationError

from prd_kit.context.config import ContextConfig, load_context_config


class TestContextConfig:
    def test_defaults(self) -> None:
        config = ContextConfig()

        assert config.chunk_size == 1500
        assert config.chunk_overlap == 200
        assert config.module_chunk_size == 1200
        assert config.global_max_chunks == 5
        assert config.module_max_chunks == 3
        assert config.global_distributed_limit == 8
        assert config.module_first_limit == 6
        assert config.max_context_tokens == 2000

    def test_is_immutable(self) -> None:
        config = ContextConfig()

        with pytest.raises(ValidationError):
            config.chunk_size = 10  # type: ignore[misc]

    def test_rejects_overlap_wider_than_module_chunks(self) -> None:
        with pytest.raises(ValidationError, match="module chunk size"):
            ContextConfig(chunk_size=100, chunk_overlap=90, module_chunk_ratio=0.8)

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValidationError):
            ContextConfig(max_chunks=3)  # type: ignore[call-arg]

    def test_rejects_non_positive_sizes(self) -> None:
        with pytest.raises(ValidationError):
            ContextConfig(chunk_size=0)


class TestLoadContextConfig:
    def test_loads_overrides_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "context.yaml"
        path.write_text("chunk_size: 800\nchunk_overlap: 50\nglobal_max_chunks: 4\n")

        config = load_context_config(path)

        assert config.chunk_size == 800
        assert config.chunk_overlap == 50
        assert config.global_max_chunks == 4
        assert config.module_max_chunks == 3

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "context.yaml"
        path.write_text("")

        assert load_context_config(path) == ContextConfig()

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "context.yaml"
        path.write_text("chunk_size: -5\n")

        with pytest.raises(ValidationError):
            load_context_config(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_context_config(tmp_path / "nope.yaml")
