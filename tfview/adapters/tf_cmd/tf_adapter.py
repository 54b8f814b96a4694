"""TFVC adapter implementing the tool ports using subprocess tf commands."""

import logging
import shutil
import subprocess
from pathlib import Path

from tfview.adapters.tf_cmd.status_parser import NO_PENDING_CHANGES, parse_status
from tfview.core.parsing.changeset_parser import split_history
from tfview.domain.entities import (
    Changeset,
    CommandResult,
    RunOptions,
    StatusSnapshot,
    ToolCommand,
    ToolOutput,
)
from tfview.domain.exceptions import (
    ToolCommandError,
    ToolPathUnknownError,
    ToolProcessError,
)

logger = logging.getLogger(__name__)

# Team Explorer location of tf.exe in a default Visual Studio 2017 install
DEFAULT_TF_PATH = (
    r"C:\Program Files (x86)\Microsoft Visual Studio\2017\Enterprise\Common7\IDE"
    r"\CommonExtensions\Microsoft\TeamFoundation\Team Explorer\TF.exe"
)

NO_HISTORY_ENTRIES = "No history entries were found"


def resolve_tf_path(configured: str = "") -> Path:
    """Locate the tf executable.

    Args:
        configured: Path from configuration. Empty string means auto-detect
            from PATH, then the default Visual Studio location.

    Returns:
        Path to the tf executable.

    Raises:
        ToolPathUnknownError: If the configured path does not exist or tf
            cannot be found.
    """
    if configured:
        path = Path(configured).expanduser()
        if not path.is_file():
            raise ToolPathUnknownError(configured)
        return path

    for name in ("tf", "tf.exe", "TF.exe"):
        found = shutil.which(name)
        if found:
            return Path(found)

    default = Path(DEFAULT_TF_PATH)
    if default.is_file():
        return default

    raise ToolPathUnknownError()


def _first_line(text: str) -> str:
    return next((line.strip() for line in text.splitlines() if line.strip()), "")


class TfAdapter:
    """TFVC adapter using subprocess calls to the tf client."""

    def __init__(
        self,
        workspace_root: Path,
        tf_path: str = "",
        command_timeout: float | None = None,
    ) -> None:
        """Initialize tf adapter.

        Args:
            workspace_root: Local directory mapped in a TFVC workspace.
            tf_path: Configured path to tf. Empty string means auto-detect.
            command_timeout: Seconds before a tf invocation is abandoned.
                None waits indefinitely.

        Raises:
            ToolPathUnknownError: If tf cannot be located.
        """
        self.workspace_root = workspace_root.resolve()
        self.tf_path = resolve_tf_path(tf_path)
        self.command_timeout = command_timeout

    def run(
        self,
        command: ToolCommand,
        args: list[str],
        options: RunOptions | None = None,
    ) -> ToolOutput:
        """Run a tf command in the workspace.

        Args:
            command: tf command name.
            args: Command arguments (without the command name).
            options: Runner options; recursive appends /recursive.

        Returns:
            ToolOutput with UTF-8 decoded streams and the exit code.

        Raises:
            ToolProcessError: If tf cannot be started or times out.
        """
        cmd = [str(self.tf_path), command.value, *args]
        if options is not None and options.recursive:
            cmd.append("/recursive")

        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=self.workspace_root,
                capture_output=True,
                check=False,
                timeout=self.command_timeout,
            )
        except FileNotFoundError as e:
            raise ToolProcessError(
                f"tf executable not found: {self.tf_path}",
                hint="Check 'tf_path' in the [tool] section of config.toml",
            ) from e
        except PermissionError as e:
            raise ToolProcessError(f"tf executable is not runnable: {self.tf_path}") from e
        except subprocess.TimeoutExpired as e:
            raise ToolProcessError(
                f"tf {command.value} did not finish within {self.command_timeout}s",
                hint="Increase 'command_timeout' in the [tool] section of config.toml",
            ) from e

        stdout = result.stdout.decode("utf-8", errors="replace")
        stderr = result.stderr.decode("utf-8", errors="replace")
        if stderr:
            logger.debug("tf %s stderr: %s", command.value, stderr.strip())
        return ToolOutput(stdout=stdout, stderr=stderr, exit_code=result.returncode)

    def _check(self, command: ToolCommand, output: ToolOutput) -> ToolOutput:
        if output.exit_code != 0:
            raise ToolCommandError(
                command.value, output.exit_code, stderr=output.stderr, stdout=output.stdout
            )
        return output

    def status(self, path: str, recursive: bool = True) -> StatusSnapshot:
        """Query pending changes under a path.

        Raises:
            ToolProcessError: If tf cannot be started.
            ToolCommandError: If tf exits with an error.
            ValueError: If the output cannot be parsed.
        """
        output = self.run(ToolCommand.STATUS, [path], RunOptions(recursive=recursive))
        # tf status exits non-zero when nothing is pending
        if NO_PENDING_CHANGES in output.stdout:
            return StatusSnapshot(has_pending_changes=False)
        self._check(ToolCommand.STATUS, output)
        return parse_status(output.stdout)

    def history(
        self,
        path: str,
        count: int,
        version: int | None = None,
        recursive: bool = True,
    ) -> list[Changeset]:
        """Get detailed history of a file or folder, newest first.

        Raises:
            ToolProcessError: If tf cannot be started.
            ToolCommandError: If tf exits with an error.
        """
        args = [path, "/format:detailed", f"/stopafter:{count}"]
        if version is not None:
            args.append(f"/version:{version}")
        output = self.run(ToolCommand.HISTORY, args, RunOptions(recursive=recursive))
        if NO_HISTORY_ENTRIES in output.stdout or NO_HISTORY_ENTRIES in output.stderr:
            return []
        self._check(ToolCommand.HISTORY, output)
        return split_history(output.stdout)

    def view(self, path: str, version: str | None = None) -> str:
        """Get the content of a file at a version (latest when None).

        Raises:
            ToolProcessError: If tf cannot be started.
            ToolCommandError: If tf exits with an error.
        """
        args = [path, "/console"]
        if version:
            args.append(f"/version:{version}")
        output = self._check(ToolCommand.VIEW, self.run(ToolCommand.VIEW, args))
        return output.stdout

    def _workspace_command(
        self,
        command: ToolCommand,
        args: list[str],
        recursive: bool,
        success_message: str,
    ) -> CommandResult:
        output = self.run(command, args, RunOptions(recursive=recursive))
        success = output.exit_code == 0
        if success:
            message = success_message
        else:
            message = _first_line(output.stderr) or f"tf {command.value} failed"
        return CommandResult(
            command=command,
            success=success,
            message=message,
            stdout=output.stdout,
            stderr=output.stderr,
            exit_code=output.exit_code,
        )

    def get(self, path: str, recursive: bool = True) -> CommandResult:
        """Get the latest version of a path from the server."""
        return self._workspace_command(
            ToolCommand.GET, [path, "/noprompt"], recursive, "Get latest completed"
        )

    def checkout(self, path: str, recursive: bool = False) -> CommandResult:
        """Check out a path for edit."""
        return self._workspace_command(
            ToolCommand.CHECKOUT, [path], recursive, "All files checked out successfully"
        )

    def undo(self, path: str, recursive: bool = True) -> CommandResult:
        """Undo pending changes on a path."""
        return self._workspace_command(
            ToolCommand.UNDO, [path, "/noprompt"], recursive, "Pending changes undone"
        )
