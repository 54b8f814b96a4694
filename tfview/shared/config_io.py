"""Configuration I/O utilities for reading and writing TOML config files.

This module handles serialization/deserialization of TfviewConfig to/from
TOML format.
"""

import os
import platform
import tomllib
from dataclasses import asdict
from pathlib import Path
from typing import Any

import tomli_w

from tfview.domain.config import TfviewConfig


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/tfview/config.toml or ~/.config/tfview/config.toml
    - Windows: %APPDATA%/tfview/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "tfview" / "config.toml"
        return Path.home() / ".config" / "tfview" / "config.toml"
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg_config:
            return Path(xdg_config) / "tfview" / "config.toml"
        return Path.home() / ".config" / "tfview" / "config.toml"


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to config.toml file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e


def config_to_data(config: TfviewConfig) -> dict[str, Any]:
    """Convert a config to TOML-ready data.

    TOML has no null, so keys whose value is None are left out.
    """
    return {
        section: {key: value for key, value in values.items() if value is not None}
        for section, values in asdict(config).items()
    }


def save_config(config: TfviewConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: TfviewConfig to save
        path: Destination path for config.toml
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(config_to_data(config), f)


def dump_config(config: TfviewConfig) -> str:
    """Render a config as TOML text."""
    return tomli_w.dumps(config_to_data(config))


def create_default_config_file(path: Path) -> None:
    """Create a default config.toml file with sensible defaults and comments.

    Args:
        path: Destination path for config.toml
    """
    # We use a template string to preserve comments and formatting
    template = """\
# tfview configuration
# Created by: tfview config init

[tool]
# Path to the tf executable. Empty means search PATH, then the
# Visual Studio 2017 Team Explorer install location.
tf_path = ""

# Seconds before a tf command is abandoned. Leave unset to wait indefinitely.
# command_timeout = 60.0

[history]
# Number of changesets listed by 'tfview history'
count = 15

[watch]
# Seconds between 'tf status' polls in 'tfview watch'
poll_interval = 2.0

# Run 'tf checkout' on a file when a save is observed
auto_checkout_on_save = false

[workspace]
# Default target of 'tfview get'. Empty means the workspace root.
source_path = ""

[diff]
# "terminal" prints a unified diff, "external" runs external_command
viewer = "terminal"

# Command with {left} and {right} placeholders, e.g. "code --diff {left} {right}"
external_command = ""

# Context lines around each change in terminal diffs
context_lines = 3

[display]
# Color output: "auto", "always" or "never"
color_scheme = "auto"
"""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(template)
