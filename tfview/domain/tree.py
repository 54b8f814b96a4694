"""Tree node types shared by the changeset and pending-changes explorers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from tfview.domain.entities import ChangesetItem, PendingChange

RecordT = TypeVar("RecordT", bound=ChangesetItem | PendingChange)


class NodeKind(str, Enum):
    """Variant tag of a tree node."""

    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class PathTreeNode(Generic[RecordT]):
    """A node in a projected path tree.

    Children are not stored; projectors compute them on each expansion from
    the current flat record set.

    Attributes:
        label: Text shown for the node.
        kind: Directory or file.
        path: Full path the node stands for (server path or local path).
        record: Backing record for file nodes. Directory nodes of the
            changeset tree carry the first record that produced them.
    """

    label: str
    kind: NodeKind
    path: str
    record: RecordT | None = None

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY


@dataclass(frozen=True)
class ExpandedNode:
    """A fully expanded node, as handed to renderers."""

    descriptor: NodeDescriptor
    children: tuple[ExpandedNode, ...] = ()


@dataclass(frozen=True)
class NodeDescriptor:
    """Display contract handed to tree renderers.

    Attributes:
        label: Text shown for the node.
        is_directory: Whether the node can be expanded.
        selection_command: Command run when the node is selected, or None.
        command_arguments: Arguments for the selection command.
    """

    label: str
    is_directory: bool
    selection_command: str | None = None
    command_arguments: tuple[str, ...] = ()
