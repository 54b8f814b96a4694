"""tfview CLI entrypoint.

Command-line interface for browsing TFVC history and pending changes.
"""

from __future__ import annotations

import functools
import logging
import sys
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console

if TYPE_CHECKING:
    from tfview.adapters.factory import UseCaseFactory
    from tfview.core.diff.diff_usecase import DiffResponse
    from tfview.domain.config import TfviewConfig
    from tfview.domain.entities import CommandResult

from tfview.core.errors import TfviewCliError, no_local_file_error, use_case_failed_error
from tfview.core.presentation.colors import TfviewColors
from tfview.core.progress import spinner_context
from tfview.core.repo_utils import resolve_workspace
from tfview.domain.entities import ToolCommand
from tfview.domain.exceptions import TfviewDomainError
from tfview.version import __version__

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    Converts domain errors to TfviewCliError so they print with their hint,
    and reports anything unexpected with a traceback in verbose mode.
    TfviewCliError exceptions are re-raised to use their built-in formatting.

    Args:
        command_name: Name of the command for error messages.

    Returns:
        Decorated function with error handling.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except TfviewCliError:
                raise
            except TfviewDomainError as e:
                raise TfviewCliError(e.message, hint=e.hint) from e
            except RuntimeError as e:
                raise TfviewCliError(
                    str(e),
                    hint="Run with --verbose for more details",
                ) from e
            except Exception as e:
                ctx = click.get_current_context()
                if ctx.obj.get("verbose", False):
                    import traceback

                    traceback.print_exc()
                raise TfviewCliError(
                    f"Unexpected error in {command_name}: {e}",
                    hint="Run with --verbose for more details",
                ) from e

        return wrapper

    return decorator


@dataclass
class WorkspaceContext:
    """Workspace and configuration shared by all commands."""

    workspace_root: Path
    config_dir: Path
    config: TfviewConfig

    @functools.cached_property
    def factory(self) -> UseCaseFactory:
        from tfview.adapters.factory import UseCaseFactory

        return UseCaseFactory(self.config, self.workspace_root)


def _load_config(config_dir: Path) -> TfviewConfig:
    """Load configuration merged from the global and workspace config files."""
    from tfview.adapters.factory import ConfigFactory

    return ConfigFactory().create_config_provider().load(config_dir)


def _workspace(ctx: click.Context) -> WorkspaceContext:
    """Discover the workspace and load its configuration once per invocation."""
    if "workspace" not in ctx.obj:
        root, config_dir = resolve_workspace(ctx.obj.get("start_path"))
        ctx.obj["workspace"] = WorkspaceContext(root, config_dir, _load_config(config_dir))
    return ctx.obj["workspace"]


def _use_color(config: TfviewConfig) -> bool:
    scheme = config.display.color_scheme
    if scheme == "always":
        return True
    if scheme == "never":
        return False
    return sys.stdout.isatty()


def _console(config: TfviewConfig) -> Console:
    scheme = config.display.color_scheme
    if scheme == "auto":
        return Console()
    return Console(force_terminal=scheme == "always", no_color=scheme == "never")


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


@click.group()
@click.version_option(version=__version__, prog_name="tfview")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress non-essential output.",
)
@click.option(
    "--workspace",
    "-w",
    "start_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory inside the workspace (default: current directory).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, start_path: Path | None) -> None:
    """tfview - Browse TFVC history and pending changes.

    Wraps the Team Foundation Version Control command-line client (tf).
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["start_path"] = start_path
    _configure_logging(verbose, quiet)


# Pending changes


@cli.command()
@click.pass_context
@handle_cli_errors("status")
def status(ctx: click.Context) -> None:
    """Show the workspace's pending changes as a tree."""
    from tfview.core.presentation.tree_renderer import render_tree

    workspace = _workspace(ctx)
    factory = workspace.factory
    repository = factory.create_pending_repository()
    with spinner_context("Querying pending changes...", ctx.obj["quiet"]):
        repository.refresh()

    changes = repository.current_changes()
    if not changes:
        click.echo("There are no pending changes.")
        return

    nodes = factory.create_pending_explorer(repository).expand()
    console = _console(workspace.config)
    render_tree(console, f"[bold]{workspace.workspace_root}[/]", nodes)
    if not ctx.obj["quiet"]:
        click.echo(f"\n{len(changes)} pending change(s)")


@cli.command()
@click.option(
    "--interval",
    "-i",
    type=click.FloatRange(min=0, min_open=True),
    help="Seconds between polls (default: [watch] poll_interval).",
)
@click.pass_context
@handle_cli_errors("watch")
def watch(ctx: click.Context, interval: float | None) -> None:
    """Keep the pending changes tree up to date until interrupted.

    tf status is polled on a fixed interval, and saved files trigger an
    immediate refresh (checking them out first when
    [watch] auto_checkout_on_save is set).
    """
    from tfview.core.presentation.tree_renderer import render_tree

    workspace = _workspace(ctx)
    factory = workspace.factory
    poll_interval = interval or workspace.config.watch.poll_interval
    repository = factory.create_pending_repository()
    explorer = factory.create_pending_explorer(repository)
    poller = factory.create_status_poller(repository, poll_interval)
    detector = factory.create_save_detector()
    console = _console(workspace.config)

    changed = threading.Event()
    last_signature: list[tuple[str, str]] | None = None

    def on_changes(changes) -> None:
        nonlocal last_signature
        signature = sorted((key, change.action) for key, change in changes.items())
        if signature != last_signature:
            last_signature = signature
            changed.set()

    repository.subscribe(on_changes)
    if not ctx.obj["quiet"]:
        click.echo(
            f"Watching {workspace.workspace_root} {TfviewColors.click_dimmed('(Ctrl+C to stop)')}"
        )

    title = f"[bold]{workspace.workspace_root}[/]"
    detector.scan()
    with poller:
        try:
            while True:
                time.sleep(poll_interval)
                for path in detector.scan():
                    poller.notify_saved(str(path))
                if changed.is_set():
                    changed.clear()
                    console.rule()
                    if repository.current_changes():
                        render_tree(console, title, explorer.expand())
                    else:
                        console.print("There are no pending changes.")
        except KeyboardInterrupt:
            if not ctx.obj["quiet"]:
                click.echo("\nStopped watching")


# History


@cli.command()
@click.argument("path", required=False)
@click.option(
    "--count",
    "-n",
    type=click.IntRange(min=1),
    help="Number of changesets to list (default: [history] count).",
)
@click.option(
    "--recursive/--no-recursive",
    default=True,
    show_default=True,
    help="Include changes to items below a folder.",
)
@click.pass_context
@handle_cli_errors("history")
def history(ctx: click.Context, path: str | None, count: int | None, recursive: bool) -> None:
    """List the most recent changesets of PATH (default: the workspace)."""
    from tfview.core.history.history_usecase import HistoryRequest
    from tfview.core.presentation.history_renderer import render_history

    workspace = _workspace(ctx)
    request = HistoryRequest(
        path=path or str(workspace.workspace_root),
        count=count or workspace.config.history.count,
        recursive=recursive,
    )
    with spinner_context("Fetching history...", ctx.obj["quiet"]):
        response = workspace.factory.create_history_usecase().execute(request)
    if not response.success:
        use_case_failed_error(response.error)
    render_history(_console(workspace.config), response.changesets)


def _find_changeset(ctx: click.Context, changeset_id: int, path: str | None):
    workspace = _workspace(ctx)
    usecase = workspace.factory.create_history_usecase()
    response = usecase.find_changeset(path or str(workspace.workspace_root), changeset_id)
    if not response.success:
        use_case_failed_error(response.error)
    return response


@cli.command()
@click.argument("changeset_id", type=int)
@click.option("--path", "-p", help="Path the changeset touched (default: the workspace).")
@click.pass_context
@handle_cli_errors("show")
def show(ctx: click.Context, changeset_id: int, path: str | None) -> None:
    """Print the complete details of a changeset, exactly as tf reports them."""
    response = _find_changeset(ctx, changeset_id, path)
    click.echo(str(response.changeset).strip("\r\n"))


@cli.command()
@click.argument("changeset_id", type=int)
@click.option("--path", "-p", help="Path the changeset touched (default: the workspace).")
@click.pass_context
@handle_cli_errors("files")
def files(ctx: click.Context, changeset_id: int, path: str | None) -> None:
    """Show the files of a changeset grouped by folder."""
    from tfview.core.presentation.history_renderer import changeset_title
    from tfview.core.presentation.tree_renderer import render_tree

    response = _find_changeset(ctx, changeset_id, path)
    assert response.changeset is not None
    assert response.file_tree is not None
    render_tree(
        _console(_workspace(ctx).config),
        changeset_title(response.changeset),
        response.file_tree.expand(),
    )


# Diffs


def _report_diff(response: DiffResponse) -> None:
    if not response.success:
        use_case_failed_error(response.error)


@cli.command(name="diff-previous")
@click.argument("path")
@click.argument("changeset_id", type=int)
@click.pass_context
@handle_cli_errors("diff-previous")
def diff_previous(ctx: click.Context, path: str, changeset_id: int) -> None:
    """Diff PATH at CHANGESET_ID against its previous version."""
    workspace = _workspace(ctx)
    usecase = workspace.factory.create_diff_usecase(color=_use_color(workspace.config))
    _report_diff(usecase.diff_previous(path, changeset_id))


@cli.command()
@click.argument("path")
@click.argument("changeset_ids", type=int, nargs=-1, required=True)
@click.pass_context
@handle_cli_errors("diff")
def diff(ctx: click.Context, path: str, changeset_ids: tuple[int, ...]) -> None:
    """Diff PATH between two changesets.

    The second changeset given is shown on the left, the first on the right.
    """
    workspace = _workspace(ctx)
    usecase = workspace.factory.create_diff_usecase(color=_use_color(workspace.config))
    _report_diff(usecase.diff_selected(path, changeset_ids))


@cli.command(name="diff-latest")
@click.argument("path")
@click.argument("changeset_id", type=int)
@click.argument("local_path", required=False, type=click.Path(path_type=Path))
@click.pass_context
@handle_cli_errors("diff-latest")
def diff_latest(
    ctx: click.Context,
    path: str,
    changeset_id: int,
    local_path: Path | None,
) -> None:
    """Diff PATH at CHANGESET_ID against the workspace copy.

    LOCAL_PATH defaults to PATH, which then must be a local path.
    """
    target = local_path or Path(path)
    if not target.exists():
        no_local_file_error(str(target))
    workspace = _workspace(ctx)
    usecase = workspace.factory.create_diff_usecase(color=_use_color(workspace.config))
    _report_diff(usecase.diff_latest(path, changeset_id, target.resolve()))


@cli.command(name="diff-pending")
@click.argument("local_path", type=click.Path(path_type=Path))
@click.pass_context
@handle_cli_errors("diff-pending")
def diff_pending(ctx: click.Context, local_path: Path) -> None:
    """Diff the server's latest version of LOCAL_PATH against local edits."""
    if not local_path.exists():
        no_local_file_error(str(local_path))
    workspace = _workspace(ctx)
    usecase = workspace.factory.create_diff_usecase(color=_use_color(workspace.config))
    _report_diff(usecase.diff_pending(local_path.resolve()))


# Workspace commands


def _run_workspace_command(
    ctx: click.Context,
    command: ToolCommand,
    path: str | None,
    recursive: bool,
    description: str,
) -> CommandResult:
    from tfview.core.workspace.commands_usecase import WorkspaceCommandRequest

    workspace = _workspace(ctx)
    usecase = workspace.factory.create_workspace_usecase()
    with spinner_context(description, ctx.obj["quiet"]):
        result = usecase.execute(WorkspaceCommandRequest(command, path, recursive))

    if not result.success:
        raise TfviewCliError(result.message)
    if not ctx.obj["quiet"]:
        click.echo(TfviewColors.click_success(result.message))
        if ctx.obj["verbose"] and result.stdout.strip():
            click.echo(result.stdout.rstrip())
    if result.stderr.strip():
        click.echo(TfviewColors.click_warning(result.stderr.rstrip()), err=True)
    return result


@cli.command()
@click.argument("path", required=False)
@click.option(
    "--recursive/--no-recursive",
    default=True,
    show_default=True,
    help="Get items below a folder.",
)
@click.pass_context
@handle_cli_errors("get")
def get(ctx: click.Context, path: str | None, recursive: bool) -> None:
    """Get the latest version of PATH (default: [workspace] source_path)."""
    _run_workspace_command(ctx, ToolCommand.GET, path, recursive, "Getting latest version...")


@cli.command()
@click.argument("path")
@click.option("--recursive", "-r", is_flag=True, help="Check out items below a folder.")
@click.pass_context
@handle_cli_errors("checkout")
def checkout(ctx: click.Context, path: str, recursive: bool) -> None:
    """Check out PATH for editing."""
    _run_workspace_command(ctx, ToolCommand.CHECKOUT, path, recursive, "Checking out...")


@cli.command()
@click.argument("path")
@click.option(
    "--recursive/--no-recursive",
    default=True,
    show_default=True,
    help="Undo changes to items below a folder.",
)
@click.pass_context
@handle_cli_errors("undo")
def undo(ctx: click.Context, path: str, recursive: bool) -> None:
    """Undo the pending changes of PATH."""
    _run_workspace_command(ctx, ToolCommand.UNDO, path, recursive, "Undoing pending changes...")


# Configuration


@cli.group()
def config() -> None:
    """Manage tfview configuration files.

    tfview uses a two-tier configuration system:
    - Local: .tfview/config.toml (workspace settings)
    - Global: ~/.config/tfview/config.toml (user defaults)

    Local settings override global settings. Missing values use built-in defaults.
    """
    pass


def _display_path_status(path: Path, label: str) -> None:
    """Display a config path with its existence status."""
    status_text = "exists" if path.exists() else "not created"
    color = "green" if path.exists() else "yellow"
    click.echo(f"{label}{path}")
    click.echo(f"  Status: {click.style(status_text, fg=color)}")


@config.command(name="show")
@click.pass_context
@handle_cli_errors("config show")
def config_show(ctx: click.Context) -> None:
    """Show configuration file locations and the effective settings."""
    from tfview.shared.config_io import dump_config, get_global_config_path

    workspace = _workspace(ctx)
    _display_path_status(get_global_config_path(), "Global config: ")
    _display_path_status(workspace.config_dir / "config.toml", "Local config:  ")
    click.echo("\nEffective configuration (merged global + local):\n")
    click.echo(dump_config(workspace.config).rstrip())


@config.command(name="path")
@click.option(
    "--global", "-g", "show_global", is_flag=True, help="Show only global config path"
)
@click.option(
    "--local", "-l", "show_local", is_flag=True, help="Show only local config path"
)
@click.pass_context
@handle_cli_errors("config path")
def config_path(ctx: click.Context, show_global: bool, show_local: bool) -> None:
    """Print config file path(s) for use in scripts.

    Outputs bare paths without any decoration, suitable for piping.
    """
    from tfview.shared.config_io import get_global_config_path

    global_path = get_global_config_path()
    _, config_dir = resolve_workspace(ctx.obj.get("start_path"))
    local_path = config_dir / "config.toml"

    if show_global:
        click.echo(global_path)
        return
    if show_local:
        click.echo(local_path)
        return

    click.echo(f"global:{global_path}")
    click.echo(f"local:{local_path}")


@config.command(name="init")
@click.option(
    "--global", "-g", "init_global", is_flag=True, help="Create the global config file"
)
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
@handle_cli_errors("config init")
def config_init(ctx: click.Context, init_global: bool, force: bool) -> None:
    """Create a config file with default settings and comments.

    Creates the workspace config (.tfview/config.toml) by default.
    """
    from tfview.shared.config_io import create_default_config_file, get_global_config_path

    if init_global:
        path = get_global_config_path()
    else:
        _, config_dir = resolve_workspace(ctx.obj.get("start_path"))
        path = config_dir / "config.toml"

    if path.exists() and not force:
        raise TfviewCliError(
            f"Config file already exists: {path}",
            hint="Use --force to overwrite it",
        )
    create_default_config_file(path)
    click.echo(f"Created {TfviewColors.click_path(str(path))}")


if __name__ == "__main__":
    cli()
