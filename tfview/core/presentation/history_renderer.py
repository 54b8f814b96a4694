"""Rendering of changeset listings with Rich."""

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tfview.core.presentation.colors import TfviewColors
from tfview.domain.entities import Changeset


def build_history_table(changesets: Sequence[Changeset]) -> Table:
    """One row per changeset, newest first, showing the comment's first line."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Changeset", style=TfviewColors.CHANGESET_STYLE, justify="right")
    table.add_column("User", style=TfviewColors.USER_STYLE)
    table.add_column("Date", style=TfviewColors.DATE_STYLE)
    table.add_column("Items", justify="right")
    table.add_column("Comment", overflow="fold")
    for changeset in changesets:
        table.add_row(
            str(changeset.id),
            escape(changeset.user),
            escape(changeset.date),
            str(len(changeset.items)),
            escape(changeset.summary),
        )
    return table


def render_history(console: Console, changesets: Sequence[Changeset]) -> None:
    if not changesets:
        console.print("[dim]No history entries found.[/]")
        return
    console.print(build_history_table(changesets))


def changeset_title(changeset: Changeset) -> str:
    """Markup title used as the root of a changeset file tree."""
    title = f"[{TfviewColors.CHANGESET_STYLE}]Changeset {changeset.id}[/]"
    if changeset.user:
        title += f" [{TfviewColors.USER_STYLE}]{escape(changeset.user)}[/]"
    if changeset.summary:
        title += f" {escape(changeset.summary)}"
    return title
