"""Path tree projections for the changeset and pending changes explorers."""

from tfview.core.tree.changeset_tree import ChangesetFileTree, is_direct_child
from tfview.core.tree.pending_tree import PendingChangesExplorer, PendingChangesOverlay

__all__ = [
    "ChangesetFileTree",
    "PendingChangesExplorer",
    "PendingChangesOverlay",
    "is_direct_child",
]
