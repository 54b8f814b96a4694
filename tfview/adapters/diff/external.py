"""Diff viewer delegating to an external command."""

import logging
import shlex
import subprocess

from tfview.domain.entities import DiffRequest
from tfview.domain.exceptions import ToolProcessError

logger = logging.getLogger(__name__)

LEFT_PLACEHOLDER = "{left}"
RIGHT_PLACEHOLDER = "{right}"


def build_command(template: str, left: str, right: str) -> list[str]:
    """Expand a viewer command template into an argument list.

    The template is split like a shell command line, then {left} and
    {right} are replaced in each argument. When the template names neither
    placeholder, both paths are appended.

    Args:
        template: Command such as "code --diff {left} {right}".
        left: Path of the left file.
        right: Path of the right file.

    Returns:
        Argument list for subprocess.

    Raises:
        ValueError: If the template is empty.
    """
    args = shlex.split(template)
    if not args:
        raise ValueError("External diff command is empty")
    if LEFT_PLACEHOLDER not in template and RIGHT_PLACEHOLDER not in template:
        return [*args, left, right]
    return [arg.replace(LEFT_PLACEHOLDER, left).replace(RIGHT_PLACEHOLDER, right) for arg in args]


class ExternalDiffViewer:
    """Opens the two sources in an external diff tool."""

    def __init__(self, command_template: str) -> None:
        self.command_template = command_template

    def open(self, request: DiffRequest) -> None:
        """Launch the external tool and wait for it to return.

        Raises:
            ToolProcessError: If the tool cannot be started or fails.
        """
        command = build_command(self.command_template, request.left.path, request.right.path)
        logger.debug("Launching diff viewer: %s", command)
        try:
            result = subprocess.run(command, check=False)
        except OSError as e:
            raise ToolProcessError(
                f"Could not start diff viewer '{command[0]}': {e}",
                hint="Check 'external_command' in the [diff] section of config.toml",
            ) from e
        # diff(1) style tools exit 1 when the files differ
        if result.returncode > 1:
            raise ToolProcessError(f"Diff viewer failed (exit code {result.returncode})")
        logger.debug("Diff viewer exited with %d", result.returncode)
