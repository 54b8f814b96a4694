"""Pending changes overlay of the workspace filesystem.

The overlay walks the real directory tree from the workspace root and keeps
an entry only if some tracked pending change path starts with the entry's
path. Directories without pending descendants are pruned; a file is shown
when it is itself a tracked path.
"""

import logging
from pathlib import Path

from tfview.core.pending.repository import PendingChangeRepository, path_included
from tfview.domain.entities import PendingChange, normalize_path
from tfview.domain.exceptions import FileNotFoundInWorkspace
from tfview.domain.tree import ExpandedNode, NodeDescriptor, NodeKind, PathTreeNode
from tfview.ports.fs import FileSystem

logger = logging.getLogger(__name__)

DIFF_PENDING_COMMAND = "diff-pending"


def _sort_key(node: PathTreeNode[PendingChange]) -> tuple[int, str]:
    return (0 if node.is_directory else 1, node.label.casefold())


class PendingChangesOverlay:
    """Filtered view of the workspace showing only pending changes."""

    def __init__(self, repository: PendingChangeRepository, fs: FileSystem) -> None:
        self._repository = repository
        self._fs = fs

    def top_level(self) -> list[PathTreeNode[PendingChange]]:
        """Entries of the workspace root with pending changes at or below them."""
        return self._entries(self._repository.workspace_root)

    def children(self, node: PathTreeNode[PendingChange]) -> list[PathTreeNode[PendingChange]]:
        """Entries of a directory node with pending changes at or below them.

        Raises:
            FileNotFoundInWorkspace: If the directory no longer exists.
        """
        if not node.is_directory:
            return []
        return self._entries(Path(node.path))

    def _entries(self, directory: Path) -> list[PathTreeNode[PendingChange]]:
        changes = self._repository.current_changes()
        nodes: list[PathTreeNode[PendingChange]] = []
        for name, is_dir in self._fs.list_dir(directory):
            entry = directory / name
            if not path_included(changes, entry):
                continue
            nodes.append(
                PathTreeNode(
                    label=name,
                    kind=NodeKind.DIRECTORY if is_dir else NodeKind.FILE,
                    path=str(entry),
                    record=None if is_dir else changes.get(normalize_path(str(entry))),
                )
            )
        nodes.sort(key=_sort_key)
        return nodes

    def describe(self, node: PathTreeNode[PendingChange]) -> NodeDescriptor:
        """Display descriptor; selecting a file diffs it against the server."""
        if node.is_directory:
            return NodeDescriptor(label=node.label, is_directory=True)
        label = node.label
        if node.record is not None and node.record.action:
            label = f"{node.label} [{node.record.action}]"
        return NodeDescriptor(
            label=label,
            is_directory=False,
            selection_command=DIFF_PENDING_COMMAND,
            command_arguments=(node.path,),
        )


class PendingChangesExplorer:
    """Expands the pending changes overlay for display.

    A directory that disappears between the status poll and the expansion is
    treated as removed and dropped from the tree.
    """

    def __init__(self, overlay: PendingChangesOverlay) -> None:
        self._overlay = overlay

    def expand(self) -> tuple[ExpandedNode, ...]:
        """Fully expanded pending changes tree.

        Raises:
            FileNotFoundInWorkspace: If the workspace root itself is missing.
        """
        return tuple(
            expanded
            for node in self._overlay.top_level()
            if (expanded := self._expand(node)) is not None
        )

    def _expand(self, node: PathTreeNode[PendingChange]) -> ExpandedNode | None:
        descriptor = self._overlay.describe(node)
        if not node.is_directory:
            return ExpandedNode(descriptor)
        try:
            children = self._overlay.children(node)
        except FileNotFoundInWorkspace:
            logger.debug("Directory %s vanished, dropping it from the tree", node.path)
            return None
        return ExpandedNode(
            descriptor,
            tuple(expanded for child in children if (expanded := self._expand(child)) is not None),
        )
