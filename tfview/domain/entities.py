"""Domain entities.

Core records produced by parsing TFVC output. These are pure Python
dataclasses with no dependencies on infrastructure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Sentinel id for a changeset block whose id could not be parsed
UNKNOWN_CHANGESET_ID = -1


class ToolCommand(str, Enum):
    """Commands of the tf client that tfview invokes."""

    STATUS = "status"
    HISTORY = "history"
    VIEW = "view"
    CHECKOUT = "checkout"
    GET = "get"
    UNDO = "undo"


def normalize_path(path: str) -> str:
    """Normalize a local or server path for case-insensitive comparison.

    Separators are unified to '/', a trailing separator is removed and the
    result is case-folded. tf may report the same file with mixed case.

    Args:
        path: Local filesystem path or server path ($/...).

    Returns:
        Normalized comparison key.
    """
    normalized = path.replace("\\", "/")
    if len(normalized) > 1:
        normalized = normalized.rstrip("/")
    return normalized.casefold()


@dataclass(frozen=True)
class PendingChange:
    """A file with uncommitted local edits reported by `tf status`.

    Attributes:
        file_path: Local path of the file.
        file_name: Base name of the file.
        action: Pending change type (edit, add, delete, ...).
    """

    file_path: str
    file_name: str
    action: str

    @property
    def key(self) -> str:
        """Normalized path this change is tracked under."""
        return normalize_path(self.file_path)


@dataclass(frozen=True)
class ChangesetItem:
    """One item checked in with a changeset.

    Attributes:
        type: Change type tag (e.g. "edit", "add", "delete, source rename").
        path: Server path, rooted at "$/".
    """

    type: str
    path: str


@dataclass(frozen=True)
class Changeset:
    """A numbered, atomic check-in recorded by the TFVC server.

    Attributes:
        id: Changeset number assigned by the server, or UNKNOWN_CHANGESET_ID
            when the block was malformed.
        user: User who checked in the changeset.
        date: Check-in date exactly as printed by tf (not parsed).
        comments: Check-in comment, indentation stripped.
        items: Items in the order tf listed them.
        raw: The original text block the changeset was parsed from.
    """

    id: int = UNKNOWN_CHANGESET_ID
    user: str = ""
    date: str = ""
    comments: str = ""
    items: tuple[ChangesetItem, ...] = ()
    raw: str = field(default="", repr=False)

    @property
    def version_spec(self) -> str:
        """Versionspec understood by tf (e.g. "C42")."""
        return f"C{self.id}"

    @property
    def summary(self) -> str:
        """First line of the comment, for one-line listings."""
        return self.comments.splitlines()[0] if self.comments else ""

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class StatusSnapshot:
    """Structured payload of a `tf status` query.

    Attributes:
        has_pending_changes: False when tf reported there is nothing pending.
        changes: Pending changes in the order tf listed them.
    """

    has_pending_changes: bool
    changes: tuple[PendingChange, ...] = ()


@dataclass(frozen=True)
class ToolOutput:
    """Raw result of one tf invocation."""

    stdout: str
    stderr: str
    exit_code: int


@dataclass(frozen=True)
class RunOptions:
    """Options recognized by the tf runner."""

    recursive: bool = False


@dataclass
class CommandResult:
    """Outcome of a workspace command (get, checkout, undo).

    Attributes:
        command: The tf command that was run.
        success: True if tf exited with code 0.
        message: Short user-facing summary.
        stdout: Standard output of tf.
        stderr: Error output of tf.
        exit_code: Process exit code.
    """

    command: ToolCommand
    success: bool
    message: str
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0


@dataclass(frozen=True)
class DiffPair:
    """Two content snapshots to compare, left (older) and right (newer)."""

    left: str
    right: str
    left_label: str = ""
    right_label: str = ""


@dataclass(frozen=True)
class DiffSource:
    """One side of a diff request.

    Attributes:
        label: Display label for the side.
        path: Path of the file holding the content.
        is_temporary: True when the file was generated for this diff.
    """

    label: str
    path: str
    is_temporary: bool = False


@dataclass(frozen=True)
class DiffRequest:
    """Two content sources to open side by side."""

    left: DiffSource
    right: DiffSource
    title: str = ""
