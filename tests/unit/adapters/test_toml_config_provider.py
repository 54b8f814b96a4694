"""Unit tests for TomlConfigProvider adapter."""

import logging
from pathlib import Path

import pytest

from tfview.adapters.config.toml_config_provider import TomlConfigProvider
from tfview.domain.config import TfviewConfig


@pytest.fixture
def provider() -> TomlConfigProvider:
    """Create a TomlConfigProvider instance."""
    return TomlConfigProvider()


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    path = tmp_path / "ws" / ".tfview"
    path.mkdir(parents=True)
    return path


def write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestLoadConfig:
    """Tests for the global/local cascade."""

    def test_no_files_gives_defaults(self, provider, config_dir):
        assert provider.load(config_dir) == TfviewConfig.default()

    def test_missing_config_dir_gives_defaults(self, provider, tmp_path):
        assert provider.load(tmp_path / "nowhere" / ".tfview") == TfviewConfig.default()

    def test_global_config_applies(self, provider, config_dir, isolated_global_config):
        write(isolated_global_config, '[tool]\ntf_path = "/opt/tf"\n')
        assert provider.load(config_dir).tool.tf_path == "/opt/tf"

    def test_local_overrides_global_per_key(self, provider, config_dir, isolated_global_config):
        """Test that a local key wins while other global keys survive."""
        write(isolated_global_config, "[watch]\npoll_interval = 5.0\nauto_checkout_on_save = true\n")
        write(config_dir / "config.toml", "[watch]\npoll_interval = 1.0\n")

        config = provider.load(config_dir)

        assert config.watch.poll_interval == 1.0
        assert config.watch.auto_checkout_on_save is True


class TestInvalidConfig:
    """Tests for invalid files being skipped with a warning."""

    def test_invalid_local_keeps_global(self, provider, config_dir, isolated_global_config, caplog):
        write(isolated_global_config, "[history]\ncount = 30\n")
        write(config_dir / "config.toml", "[history]\ncount = -1\n")

        with caplog.at_level(logging.WARNING):
            config = provider.load(config_dir)

        assert config.history.count == 30
        assert "Failed to parse config.toml" in caplog.text

    def test_invalid_global_is_ignored(self, provider, config_dir, isolated_global_config, caplog):
        write(isolated_global_config, "not toml at all [")
        write(config_dir / "config.toml", "[history]\ncount = 7\n")

        with caplog.at_level(logging.WARNING):
            config = provider.load(config_dir)

        assert config.history.count == 7
        assert "Ignoring global config" in caplog.text
