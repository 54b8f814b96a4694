"""Pending change repository.

Keeps an in-memory view of the workspace's pending changes, refreshed from
`tf status`. The whole map is rebuilt on every refresh and swapped in
atomically; readers only ever see an immutable snapshot.

Refreshes may run concurrently (poll timer and save events) and complete
out of order. Each query is tagged with a generation number when it starts;
a completion older than the last applied one is discarded, so a slow stale
query never overwrites newer data.
"""

import logging
import threading
from collections.abc import Callable, Mapping
from pathlib import Path
from types import MappingProxyType

from tfview.domain.entities import PendingChange, StatusSnapshot, normalize_path
from tfview.domain.exceptions import ToolCommandError, ToolProcessError
from tfview.ports.tool import StatusSource

logger = logging.getLogger(__name__)

ChangesListener = Callable[[Mapping[str, PendingChange]], None]

_EMPTY: Mapping[str, PendingChange] = MappingProxyType({})


class PendingChangeRepository:
    """Owns the current set of pending changes for a workspace."""

    def __init__(self, status_source: StatusSource, workspace_root: Path) -> None:
        """Initialize the repository with an empty change set.

        Args:
            status_source: Adapter answering `tf status` queries.
            workspace_root: Root of the workspace to query recursively.
        """
        self._status_source = status_source
        self._workspace_root = workspace_root
        self._changes: Mapping[str, PendingChange] = _EMPTY
        self._lock = threading.Lock()
        self._started_generation = 0
        self._applied_generation = 0
        self._listeners: list[ChangesListener] = []
        # Reentrant so a listener may itself call refresh()
        self._delivery_lock = threading.RLock()

    @property
    def workspace_root(self) -> Path:
        return self._workspace_root

    def subscribe(self, listener: ChangesListener) -> None:
        """Register a callback invoked with each newly applied snapshot.

        Listeners are called one snapshot at a time, never concurrently, and
        never with a snapshot older than one already delivered.
        """
        with self._lock:
            self._listeners.append(listener)

    def refresh(self) -> None:
        """Query tf status and replace the change set with the result.

        Safe to call from several threads at once. A failed or unusable
        query clears the change set, the same as "nothing pending".
        """
        with self._lock:
            self._started_generation += 1
            generation = self._started_generation

        snapshot = self._query()
        changes = self._build(snapshot)

        with self._lock:
            if generation < self._applied_generation:
                logger.debug(
                    "Discarding stale status result (generation %d < %d)",
                    generation,
                    self._applied_generation,
                )
                return
            self._applied_generation = generation
            self._changes = changes

        logger.debug("Pending changes refreshed: %d tracked", len(changes))
        self._deliver(generation, changes)

    def _deliver(self, generation: int, changes: Mapping[str, PendingChange]) -> None:
        # One delivery at a time; a snapshot superseded before or during its
        # delivery is not passed to the remaining listeners.
        with self._delivery_lock:
            with self._lock:
                listeners = list(self._listeners)
            for listener in listeners:
                with self._lock:
                    if generation != self._applied_generation:
                        return
                listener(changes)

    def _query(self) -> StatusSnapshot | None:
        try:
            return self._status_source.status(str(self._workspace_root), recursive=True)
        except (ToolCommandError, ToolProcessError, ValueError) as e:
            logger.warning("Status query failed, treating as no pending changes: %s", e)
            return None

    @staticmethod
    def _build(snapshot: StatusSnapshot | None) -> Mapping[str, PendingChange]:
        if snapshot is None or not snapshot.has_pending_changes:
            return _EMPTY
        changes: dict[str, PendingChange] = {}
        for change in snapshot.changes:
            changes[change.key] = change
        return MappingProxyType(changes)

    def current_changes(self) -> Mapping[str, PendingChange]:
        """Current snapshot, keyed by normalized path. Read-only."""
        return self._changes

    def is_path_included(self, path: str | Path) -> bool:
        """Check whether a path is, or contains, a pending change.

        Comparison is a case-insensitive string prefix test of the query
        path against every tracked path, so a directory matches the deeper
        files it contains.

        Args:
            path: Local path of a file or directory.

        Returns:
            True if some tracked path starts with the normalized query path.
        """
        return path_included(self._changes, path)


def path_included(changes: Mapping[str, PendingChange], path: str | Path) -> bool:
    """Prefix test of a path against one snapshot of tracked changes."""
    prefix = normalize_path(str(path))
    return any(tracked.startswith(prefix) for tracked in changes)
