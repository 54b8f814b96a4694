"""Version control tool port interfaces.

Defines abstract interfaces for invoking the tf client and for the queries
the core needs from it.
"""

from typing import Protocol

from tfview.domain.entities import (
    Changeset,
    CommandResult,
    RunOptions,
    StatusSnapshot,
    ToolCommand,
    ToolOutput,
)


class ToolRunner(Protocol):
    """Protocol for running a tf command and collecting its output."""

    def run(
        self,
        command: ToolCommand,
        args: list[str],
        options: RunOptions | None = None,
    ) -> ToolOutput:
        """Run a tf command.

        Args:
            command: Command name.
            args: Positional arguments (paths and command-specific flags).
            options: Options recognized by the runner.

        Returns:
            Decoded output and exit code. A non-zero exit code is returned,
            not raised.

        Raises:
            ToolProcessError: If tf could not be started.
        """
        ...


class StatusSource(Protocol):
    """Protocol for pending change queries."""

    def status(self, path: str, recursive: bool = True) -> StatusSnapshot:
        """Query pending changes under a path.

        Raises:
            ToolProcessError: If tf could not be started.
            ToolCommandError: If tf exited with an error.
        """
        ...


class HistorySource(Protocol):
    """Protocol for detailed history queries."""

    def history(
        self,
        path: str,
        count: int,
        version: int | None = None,
        recursive: bool = True,
    ) -> list[Changeset]:
        """Get the detailed history of a file or folder, newest first.

        Args:
            path: Local or server path.
            count: Maximum number of changesets to return.
            version: Changeset to anchor the query at. None for latest.
            recursive: Include history of items below a folder.

        Raises:
            ToolProcessError: If tf could not be started.
            ToolCommandError: If tf exited with an error.
        """
        ...


class ContentSource(Protocol):
    """Protocol for fetching file content at a version."""

    def view(self, path: str, version: str | None = None) -> str:
        """Get the content of a file at a version.

        Args:
            path: Local or server path.
            version: tf versionspec ("C42", "42", ...). None for latest.

        Raises:
            ToolProcessError: If tf could not be started.
            ToolCommandError: If tf exited with an error.
        """
        ...


class WorkspaceTool(Protocol):
    """Protocol for commands that change the workspace."""

    def get(self, path: str, recursive: bool = True) -> CommandResult: ...

    def checkout(self, path: str, recursive: bool = False) -> CommandResult: ...

    def undo(self, path: str, recursive: bool = True) -> CommandResult: ...
