"""Progress reporting utilities for CLI commands.

Provides a Rich spinner for tf commands that may take a while.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

logger = logging.getLogger(__name__)


class SpinnerStatus:
    """Handle for updating the spinner text of a running command."""

    def __init__(self, progress: Progress, task_id: int) -> None:
        self.progress = progress
        self.task_id = task_id

    def update(self, description: str) -> None:
        self.progress.update(self.task_id, description=description)


@contextmanager
def spinner_context(
    description: str,
    quiet_mode: bool = False,
    console: Console | None = None,
) -> Generator[SpinnerStatus | None, None, None]:
    """Context manager showing a transient spinner while a command runs.

    Args:
        description: Text shown next to the spinner.
        quiet_mode: If True, yields None and shows nothing.
        console: Console to draw on. Defaults to stderr.

    Yields:
        SpinnerStatus if not quiet, None otherwise.

    Example:
        with spinner_context("Getting latest version...", quiet) as spinner:
            result = usecase.execute(request)
    """
    if quiet_mode:
        yield None
        return
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
        console=console or Console(stderr=True),
    ) as progress:
        task_id = progress.add_task(description, total=None)
        yield SpinnerStatus(progress, task_id)
