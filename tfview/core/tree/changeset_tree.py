"""Two-level projection of a changeset's items.

The top level holds one directory node per distinct parent folder of the
changeset's items; expanding a directory lists the items that are its direct
children. Nodes are recomputed from the flat item list on every request.
"""

from collections.abc import Sequence

from tfview.domain.entities import Changeset, ChangesetItem
from tfview.domain.tree import ExpandedNode, NodeDescriptor, NodeKind, PathTreeNode

SERVER_SEPARATOR = "/"

DIFF_PREVIOUS_COMMAND = "diff-previous"


def parent_path(path: str) -> str:
    """Path with its final segment removed ("$/a/b/c.ts" -> "$/a/b")."""
    head, _, _ = path.rpartition(SERVER_SEPARATOR)
    return head


def final_segment(path: str) -> str:
    return path.rpartition(SERVER_SEPARATOR)[2]


def is_direct_child(directory: str, path: str) -> bool:
    """Check whether path is a direct child of directory.

    The path must start with the directory, and the remaining suffix must
    contain exactly one separator. A deeper descendant has more than one
    and is rejected.
    """
    if not path.startswith(directory):
        return False
    suffix = path[len(directory) :]
    return suffix.count(SERVER_SEPARATOR) == 1


def top_level(records: Sequence[ChangesetItem]) -> list[PathTreeNode[ChangesetItem]]:
    """Directory nodes, one per distinct parent, in order of first appearance."""
    directories: dict[str, PathTreeNode[ChangesetItem]] = {}
    for record in records:
        parent = parent_path(record.path)
        if parent not in directories:
            directories[parent] = PathTreeNode(
                label=parent,
                kind=NodeKind.DIRECTORY,
                path=parent,
                record=record,
            )
    return list(directories.values())


def children(
    node: PathTreeNode[ChangesetItem],
    records: Sequence[ChangesetItem],
) -> list[PathTreeNode[ChangesetItem]]:
    """File nodes directly under a directory node. Files have no children."""
    if not node.is_directory:
        return []
    return [
        PathTreeNode(
            label=final_segment(record.path),
            kind=NodeKind.FILE,
            path=record.path,
            record=record,
        )
        for record in records
        if is_direct_child(node.label, record.path)
    ]


class ChangesetFileTree:
    """Tree of the files checked in with one changeset."""

    def __init__(self, changeset: Changeset) -> None:
        self.changeset = changeset

    def top_level(self) -> list[PathTreeNode[ChangesetItem]]:
        return top_level(self.changeset.items)

    def children(self, node: PathTreeNode[ChangesetItem]) -> list[PathTreeNode[ChangesetItem]]:
        return children(node, self.changeset.items)

    def describe(self, node: PathTreeNode[ChangesetItem]) -> NodeDescriptor:
        """Display descriptor; selecting a file diffs it against its predecessor."""
        if node.is_directory:
            return NodeDescriptor(label=node.label, is_directory=True)
        return NodeDescriptor(
            label=node.label,
            is_directory=False,
            selection_command=DIFF_PREVIOUS_COMMAND,
            command_arguments=(node.path, str(self.changeset.id)),
        )

    def expand(self) -> tuple[ExpandedNode, ...]:
        """Fully expanded tree for display."""
        return tuple(
            ExpandedNode(
                self.describe(directory),
                tuple(ExpandedNode(self.describe(child)) for child in self.children(directory)),
            )
            for directory in self.top_level()
        )
