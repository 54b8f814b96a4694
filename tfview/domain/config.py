"""Config domain models for tfview.

Configuration is stored in .tfview/config.toml (per workspace) and
~/.config/tfview/config.toml (global). This module defines the domain models
that represent validated configuration state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Literal


@dataclass(frozen=True)
class ToolConfig:
    """Configuration for locating and running the tf client.

    Attributes:
        tf_path: Path to tf executable. Empty string means auto-detect.
        command_timeout: Seconds before a tf invocation is abandoned.
            None (default) waits indefinitely.

    Raises:
        ValueError: If command_timeout is not positive.
    """

    tf_path: str = ""
    command_timeout: float | None = None

    def __post_init__(self) -> None:
        """Validate tool config after initialization."""
        if self.command_timeout is not None and self.command_timeout <= 0:
            raise ValueError(
                f"command_timeout must be positive, got {self.command_timeout}"
            )


@dataclass(frozen=True)
class HistoryConfig:
    """Configuration for history queries.

    Attributes:
        count: Number of changesets fetched by history commands.

    Raises:
        ValueError: If count is not positive.
    """

    count: int = 15

    def __post_init__(self) -> None:
        """Validate history config after initialization."""
        if self.count <= 0:
            raise ValueError(f"count must be positive, got {self.count}")


@dataclass(frozen=True)
class WatchConfig:
    """Configuration for pending change polling.

    Attributes:
        poll_interval: Seconds between status polls.
        auto_checkout_on_save: Check out a file with tf before refreshing
            when a save is observed.

    Raises:
        ValueError: If poll_interval is not positive.
    """

    poll_interval: float = 2.0
    auto_checkout_on_save: bool = False

    def __post_init__(self) -> None:
        """Validate watch config after initialization."""
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")


@dataclass(frozen=True)
class WorkspaceConfig:
    """Configuration for the mapped workspace.

    Attributes:
        source_path: Default target of 'get' when no path is given.
            Empty string means the workspace root.
    """

    source_path: str = ""


@dataclass(frozen=True)
class DiffConfig:
    """Configuration for diff display.

    Attributes:
        viewer: "terminal" prints a unified diff, "external" launches
            external_command.
        external_command: Command template with {left} and {right}
            placeholders (e.g. "code --diff {left} {right}").
        context_lines: Context lines for terminal diffs.

    Raises:
        ValueError: If context_lines is negative or the external viewer has
            no command.
    """

    viewer: Literal["terminal", "external"] = "terminal"
    external_command: str = ""
    context_lines: int = 3

    def __post_init__(self) -> None:
        """Validate diff config after initialization."""
        if self.context_lines < 0:
            raise ValueError(f"context_lines cannot be negative, got {self.context_lines}")
        if self.viewer not in ("terminal", "external"):
            raise ValueError(f"viewer must be 'terminal' or 'external', got {self.viewer!r}")
        if self.viewer == "external" and not self.external_command:
            raise ValueError("external_command is required when viewer is 'external'")


@dataclass(frozen=True)
class DisplayConfig:
    """Configuration for output display.

    Attributes:
        color_scheme: Color output mode - "auto" (default), "always", or "never"
    """

    color_scheme: Literal["auto", "always", "never"] = "auto"

    def __post_init__(self) -> None:
        """Validate display config after initialization."""
        if self.color_scheme not in ("auto", "always", "never"):
            raise ValueError(
                f"color_scheme must be 'auto', 'always' or 'never', got {self.color_scheme!r}"
            )


@dataclass(frozen=True)
class TfviewConfig:
    """Complete tfview configuration.

    Attributes:
        tool: tf client configuration
        history: History query configuration
        watch: Polling configuration
        workspace: Workspace configuration
        diff: Diff display configuration
        display: Output display configuration
    """

    tool: ToolConfig = field(default_factory=ToolConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)
    workspace: WorkspaceConfig = field(default_factory=WorkspaceConfig)
    diff: DiffConfig = field(default_factory=DiffConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @staticmethod
    def default() -> TfviewConfig:
        """Create a config with all default values."""
        return TfviewConfig()

    @staticmethod
    def from_partial(base: TfviewConfig, data: dict[str, Any]) -> TfviewConfig:
        """Overlay raw config data on top of an existing config.

        Each section present in data overrides only the keys it names; the
        merged section is validated again on construction.

        Args:
            base: Config to start from.
            data: Raw TOML data (section name -> mapping).

        Returns:
            New TfviewConfig with overrides applied.

        Raises:
            ValueError: If a section is not a table, names an unknown key,
                or fails validation.
        """
        overrides: dict[str, Any] = {}
        for section in fields(base):
            section_data = data.get(section.name)
            if section_data is None:
                continue
            if not isinstance(section_data, dict):
                raise ValueError(f"[{section.name}] must be a table")
            current = getattr(base, section.name)
            known = {f.name for f in fields(current)}
            unknown = set(section_data) - known
            if unknown:
                raise ValueError(
                    f"Unknown key(s) in [{section.name}]: {', '.join(sorted(unknown))}"
                )
            try:
                overrides[section.name] = replace(current, **section_data)
            except TypeError as e:
                raise ValueError(f"Invalid value in [{section.name}]: {e}") from e
        return replace(base, **overrides)
