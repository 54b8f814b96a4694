"""Workspace command use case: get latest, check out and undo."""

import logging
from dataclasses import dataclass
from pathlib import Path

from tfview.core.use_case_errors import format_error_message, log_use_case_error
from tfview.domain.config import WorkspaceConfig
from tfview.domain.entities import CommandResult, ToolCommand
from tfview.ports.tool import WorkspaceTool

logger = logging.getLogger(__name__)


@dataclass
class WorkspaceCommandRequest:
    """Request to run a workspace command.

    Attributes:
        command: GET, CHECKOUT or UNDO.
        path: Target path. None means the configured default target.
        recursive: Apply to items below a folder.
    """

    command: ToolCommand
    path: str | None = None
    recursive: bool = False


class WorkspaceCommandsUseCase:
    """Runs commands that change the workspace."""

    def __init__(
        self,
        tool: WorkspaceTool,
        workspace: WorkspaceConfig,
        workspace_root: Path,
    ) -> None:
        """Initialize the use case.

        Args:
            tool: Adapter running tf.
            workspace: [workspace] config section.
            workspace_root: Root of the current workspace.
        """
        self.tool = tool
        self.workspace = workspace
        self.workspace_root = workspace_root

    def default_target(self) -> str:
        """Target of a get with no explicit path."""
        return self.workspace.source_path or str(self.workspace_root)

    def execute(self, request: WorkspaceCommandRequest) -> CommandResult:
        """Run the command. Failures are returned, never raised.

        Args:
            request: Command, target and flags.

        Returns:
            CommandResult describing the outcome.
        """
        path = request.path or self.default_target()
        logger.debug("Running tf %s on %s", request.command.value, path)
        try:
            if request.command is ToolCommand.GET:
                return self.tool.get(path, recursive=request.recursive)
            if request.command is ToolCommand.CHECKOUT:
                return self.tool.checkout(path, recursive=request.recursive)
            if request.command is ToolCommand.UNDO:
                return self.tool.undo(path, recursive=request.recursive)
            raise ValueError(f"Not a workspace command: {request.command.value}")
        except (KeyboardInterrupt, SystemExit):
            raise
        except Exception as e:
            log_use_case_error(e, request.command.value)
            return CommandResult(
                command=request.command,
                success=False,
                message=format_error_message(e, request.command.value),
            )
