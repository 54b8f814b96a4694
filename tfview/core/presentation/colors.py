"""Centralized color definitions for all tfview output.

Provides a consistent color scheme across CLI commands: click styles for
messages and ANSI codes for diffs colored through Pygments tokens.
"""

from typing import TYPE_CHECKING, Literal

import click

if TYPE_CHECKING:
    from pygments.token import _TokenType

ClickColor = Literal["black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"]


class AnsiCodes:
    """ANSI escape codes for terminal coloring.

    Uses the standard 16-color palette so output adapts to terminal themes.
    """

    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"

    RED = "\x1b[91m"
    GREEN = "\x1b[92m"
    CYAN = "\x1b[96m"


class TfviewColors:
    """Color palette for messages and listings."""

    PATH_FG: ClickColor = "magenta"
    SUCCESS_FG: ClickColor = "green"
    WARNING_FG: ClickColor = "yellow"

    # Rich style names used by tree and table renderers
    DIRECTORY_STYLE = "bold blue"
    FILE_STYLE = "magenta"
    CHANGESET_STYLE = "bold green"
    USER_STYLE = "cyan"
    DATE_STYLE = "dim"

    @staticmethod
    def click_path(text: str, bold: bool = True) -> str:
        return click.style(text, fg=TfviewColors.PATH_FG, bold=bold)

    @staticmethod
    def click_success(text: str) -> str:
        return click.style(text, fg=TfviewColors.SUCCESS_FG)

    @staticmethod
    def click_warning(text: str) -> str:
        return click.style(text, fg=TfviewColors.WARNING_FG)

    @staticmethod
    def click_dimmed(text: str) -> str:
        return click.style(text, dim=True)


def _get_token_color_map() -> dict["_TokenType", str]:
    """Mapping from Pygments diff token types to ANSI color codes."""
    from pygments.token import Generic

    return {
        Generic.Inserted: AnsiCodes.GREEN,
        Generic.Deleted: AnsiCodes.RED,
        Generic.Subheading: AnsiCodes.CYAN,
        Generic.Heading: AnsiCodes.BOLD,
    }


def _find_token_color(
    token_type: "_TokenType", color_map: dict["_TokenType", str]
) -> str | None:
    """Find the color for a token, checking parent token types."""
    for ttype in [token_type] + list(token_type.split()):
        if ttype in color_map:
            return color_map[ttype]
    return None


def _colorize_text(text: str, color: str | None) -> str:
    if color and text:
        return f"{color}{text}{AnsiCodes.RESET}"
    return text


def render_diff_colored(diff_text: str) -> str:
    """Color unified diff text for the terminal.

    Lines are tokenized with the Pygments DiffLexer: insertions are green,
    deletions red and hunk headers cyan.

    Args:
        diff_text: Unified diff, one line per row.

    Returns:
        The diff with ANSI color codes, newline structure preserved.
    """
    from pygments import lex
    from pygments.lexers import DiffLexer

    color_map = _get_token_color_map()
    parts: list[str] = []
    for token_type, value in lex(diff_text, DiffLexer()):
        color = _find_token_color(token_type, color_map)
        # Keep newlines outside escape sequences so pagers count lines correctly
        for i, line in enumerate(value.split("\n")):
            if i > 0:
                parts.append("\n")
            parts.append(_colorize_text(line, color))

    rendered = "".join(parts)
    # lex() always appends a newline
    if not diff_text.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered
