"""CLI error handling with actionable hints.

Provides consistent error formatting and common error factory functions
for all tfview CLI commands.
"""

from typing import NoReturn

import click


class TfviewCliError(click.ClickException):
    """CLI error with an actionable hint for users.

    Attributes:
        message: The primary error message.
        hint: Optional actionable suggestion for the user.

    Example:
        raise TfviewCliError(
            "Select exactly two changesets to compare",
            hint="Pass two changeset ids, e.g. 'tfview diff app.ts 37 42'",
        )
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def format_message(self) -> str:
        """Format the error message with hint if present.

        Returns:
            Formatted error message, with hint on a new line if provided.
        """
        msg = self.message
        if self.hint:
            msg += f"\nHint: {self.hint}"
        return msg


def use_case_failed_error(message: str | None) -> NoReturn:
    """Raise error for a use case response that reports failure.

    Use case messages may already carry a "Hint:" line, which is kept.

    Raises:
        TfviewCliError: Always.
    """
    raise TfviewCliError(message or "Command failed")


def no_local_file_error(path: str) -> NoReturn:
    """Raise error when a diff needs a workspace file that does not exist.

    Raises:
        TfviewCliError: Always raises with a get hint.
    """
    raise TfviewCliError(
        f"'{path}' does not exist in the workspace",
        hint="Run 'tfview get <path>' to download the latest version first",
    )
