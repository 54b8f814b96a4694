"""Configuration provider port.

Defines the interface for loading and accessing application configuration.
"""

from pathlib import Path
from typing import Protocol

from tfview.domain.config import TfviewConfig


class ConfigProvider(Protocol):
    """Protocol for loading and providing configuration."""

    def load(self, config_dir: Path) -> TfviewConfig:
        """Load configuration from the workspace config directory.

        Args:
            config_dir: Path to .tfview directory containing config.toml

        Returns:
            TfviewConfig instance with loaded or default values

        Note:
            Implementations should gracefully fall back to defaults
            if config file is missing or invalid.
        """
        ...
