"""TOML-based configuration provider.

Loads configuration from .tfview/config.toml with global config fallback.

Config loading priority (highest to lowest):
1. Local: .tfview/config.toml (workspace-specific)
2. Global: ~/.config/tfview/config.toml (user defaults)
3. Built-in defaults
"""

import logging
from pathlib import Path

from tfview.domain.config import TfviewConfig
from tfview.shared.config_io import get_global_config_path, load_config_data

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider that loads from TOML files.

    Each file present is overlaid on the result of the previous step, one
    key at a time. A missing or invalid file is skipped with a warning.
    """

    def load(self, config_dir: Path) -> TfviewConfig:
        """Load configuration with global fallback.

        Args:
            config_dir: Path to .tfview directory containing config.toml

        Returns:
            TfviewConfig instance with merged global/local values or defaults
        """
        local_path = config_dir / "config.toml"
        global_path = get_global_config_path()

        config = TfviewConfig.default()

        if global_path.exists():
            try:
                global_data = load_config_data(global_path)
                config = TfviewConfig.from_partial(config, global_data)
                logger.debug("Loaded global config from %s", global_path)
            except (FileNotFoundError, ValueError) as e:
                logger.warning(
                    "Failed to parse global config at %s: %s. Ignoring global config.",
                    global_path,
                    e,
                )

        if local_path.exists():
            try:
                local_data = load_config_data(local_path)
                config = TfviewConfig.from_partial(config, local_data)
                logger.debug("Loaded local config from %s", local_path)
            except (FileNotFoundError, ValueError) as e:
                logger.warning(
                    "Failed to parse config.toml: %s. Using global/default configuration.",
                    e,
                )

        return config
