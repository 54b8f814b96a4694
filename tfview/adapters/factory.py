"""Factory classes for use case and adapter instantiation.

This module centralizes the creation of use cases and their dependencies,
keeping the CLI layer free from direct adapter imports. Adapters are imported
lazily so commands that never touch tf (config show, --help) stay fast.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tfview.adapters.fs.local import LocalFileSystem
    from tfview.adapters.tf_cmd.tf_adapter import TfAdapter
    from tfview.core.diff.diff_usecase import DiffUseCase
    from tfview.core.history.history_usecase import HistoryUseCase
    from tfview.core.pending.poller import StatusPoller
    from tfview.core.pending.repository import PendingChangeRepository
    from tfview.core.pending.save_detector import SaveDetector
    from tfview.core.tree.pending_tree import PendingChangesExplorer
    from tfview.core.workspace.commands_usecase import WorkspaceCommandsUseCase
    from tfview.domain.config import TfviewConfig
    from tfview.ports.config import ConfigProvider
    from tfview.ports.diff import DiffViewer


class ConfigFactory:
    """Factory for configuration-related components."""

    def create_config_provider(self) -> ConfigProvider:
        """Create the TOML config provider.

        Returns:
            TomlConfigProvider instance.
        """
        from tfview.adapters.config.toml_config_provider import TomlConfigProvider

        return TomlConfigProvider()


class ToolFactory:
    """Factory for tf client and filesystem adapters.

    Args:
        config: Loaded configuration.
        workspace_root: Root of the current workspace.
    """

    def __init__(self, config: TfviewConfig, workspace_root: Path) -> None:
        self._config = config
        self._workspace_root = workspace_root
        self._tf: TfAdapter | None = None

    def create_tf_adapter(self) -> TfAdapter:
        """Create (once) the adapter running tf in the workspace.

        Raises:
            ToolPathUnknownError: If the tf executable cannot be located.
        """
        if self._tf is None:
            from tfview.adapters.tf_cmd.tf_adapter import TfAdapter

            self._tf = TfAdapter(
                self._workspace_root,
                tf_path=self._config.tool.tf_path,
                command_timeout=self._config.tool.command_timeout,
            )
        return self._tf

    def create_file_system(self) -> LocalFileSystem:
        from tfview.adapters.fs.local import LocalFileSystem

        return LocalFileSystem()


class UseCaseFactory:
    """Factory for use cases and the pending changes pipeline.

    Args:
        config: Loaded configuration.
        workspace_root: Root of the current workspace.
    """

    def __init__(self, config: TfviewConfig, workspace_root: Path) -> None:
        self._config = config
        self._workspace_root = workspace_root
        self._tools = ToolFactory(config, workspace_root)

    def create_history_usecase(self) -> HistoryUseCase:
        from tfview.core.history.history_usecase import HistoryUseCase

        return HistoryUseCase(self._tools.create_tf_adapter())

    def create_workspace_usecase(self) -> WorkspaceCommandsUseCase:
        from tfview.core.workspace.commands_usecase import WorkspaceCommandsUseCase

        return WorkspaceCommandsUseCase(
            self._tools.create_tf_adapter(),
            self._config.workspace,
            self._workspace_root,
        )

    def create_diff_viewer(self, color: bool) -> DiffViewer:
        """Create the viewer selected by the [diff] config section.

        Args:
            color: Color terminal output.
        """
        if self._config.diff.viewer == "external":
            from tfview.adapters.diff.external import ExternalDiffViewer

            return ExternalDiffViewer(self._config.diff.external_command)

        from tfview.adapters.diff.terminal import TerminalDiffViewer

        return TerminalDiffViewer(
            self._tools.create_file_system(),
            context_lines=self._config.diff.context_lines,
            color=color,
        )

    def create_diff_usecase(self, color: bool = True) -> DiffUseCase:
        from tfview.core.diff.diff_usecase import DiffUseCase
        from tfview.core.diff.resolver import VersionDiffResolver
        from tfview.core.diff.staging import DiffStager

        tf = self._tools.create_tf_adapter()
        fs = self._tools.create_file_system()
        return DiffUseCase(
            VersionDiffResolver(tf, tf, fs),
            DiffStager(fs),
            self.create_diff_viewer(color),
        )

    def create_pending_repository(self) -> PendingChangeRepository:
        from tfview.core.pending.repository import PendingChangeRepository

        return PendingChangeRepository(self._tools.create_tf_adapter(), self._workspace_root)

    def create_pending_explorer(self, repository: PendingChangeRepository) -> PendingChangesExplorer:
        from tfview.core.tree.pending_tree import PendingChangesExplorer, PendingChangesOverlay

        return PendingChangesExplorer(
            PendingChangesOverlay(repository, self._tools.create_file_system())
        )

    def create_save_detector(self) -> SaveDetector:
        from tfview.core.pending.save_detector import SaveDetector

        return SaveDetector(self._tools.create_file_system(), self._workspace_root)

    def create_status_poller(
        self,
        repository: PendingChangeRepository,
        interval: float | None = None,
    ) -> StatusPoller:
        """Create a poller refreshing the repository.

        Args:
            repository: Repository to refresh.
            interval: Seconds between polls. Defaults to [watch] poll_interval.
        """
        from tfview.core.pending.poller import StatusPoller

        watch = self._config.watch
        return StatusPoller(
            repository,
            interval or watch.poll_interval,
            workspace_tool=self._tools.create_tf_adapter() if watch.auto_checkout_on_save else None,
            auto_checkout_on_save=watch.auto_checkout_on_save,
        )
