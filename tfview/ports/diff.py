"""Diff viewer port interface."""

from typing import Protocol

from tfview.domain.entities import DiffRequest


class DiffViewer(Protocol):
    """Protocol for presenting two content sources side by side."""

    def open(self, request: DiffRequest) -> None:
        """Show the diff between request.left and request.right.

        Raises:
            ToolProcessError: If an external viewer cannot be launched.
        """
        ...
