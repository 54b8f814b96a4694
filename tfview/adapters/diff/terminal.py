"""Unified diff viewer printing to the terminal."""

import difflib
import logging
from collections.abc import Callable
from pathlib import Path

import click

from tfview.core.presentation.colors import render_diff_colored
from tfview.domain.entities import DiffRequest
from tfview.ports.fs import FileSystem

logger = logging.getLogger(__name__)


class TerminalDiffViewer:
    """Prints a unified diff of the two sources."""

    def __init__(
        self,
        fs: FileSystem,
        context_lines: int = 3,
        color: bool = True,
        echo: Callable[[str], None] = click.echo,
    ) -> None:
        """Initialize the viewer.

        Args:
            fs: Reads both sides of the diff.
            context_lines: Unchanged lines shown around each change.
            color: Color the output.
            echo: Output function. Defaults to click.echo.
        """
        self.fs = fs
        self.context_lines = context_lines
        self.color = color
        self.echo = echo

    def render(self, request: DiffRequest) -> str:
        """Unified diff text of a request. Empty when both sides are equal."""
        left = self.fs.read_text(Path(request.left.path))
        right = self.fs.read_text(Path(request.right.path))
        lines = difflib.unified_diff(
            left.splitlines(keepends=True),
            right.splitlines(keepends=True),
            fromfile=request.left.label or request.left.path,
            tofile=request.right.label or request.right.path,
            n=self.context_lines,
        )
        # Content without a trailing newline would run into the next line
        return "".join(line if line.endswith("\n") else line + "\n" for line in lines)

    def open(self, request: DiffRequest) -> None:
        diff_text = self.render(request)
        if not diff_text:
            self.echo(f"No differences: {request.title}")
            return
        logger.debug("Printing %d diff lines", diff_text.count("\n"))
        self.echo(render_diff_colored(diff_text) if self.color else diff_text.rstrip("\n"))
