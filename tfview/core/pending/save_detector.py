"""Detects files saved in the workspace between two scans.

Used by the watch command as its save signal: every file whose modification
time changed, or that appeared, since the previous scan counts as saved.
"""

import logging
from pathlib import Path

from tfview.core.repo_utils import TFVC_LOCAL_WORKSPACE_DIR, TFVIEW_DIR
from tfview.ports.fs import FileSystem

logger = logging.getLogger(__name__)

# tf metadata and tfview's own files never count as saves
IGNORED_DIRS = frozenset({TFVC_LOCAL_WORKSPACE_DIR, TFVIEW_DIR})


class SaveDetector:
    """Compares workspace modification times between scans."""

    def __init__(self, fs: FileSystem, root: Path) -> None:
        self._fs = fs
        self._root = root
        self._mtimes: dict[Path, float] | None = None

    def scan(self) -> list[Path]:
        """Files saved since the previous scan, sorted.

        The first scan records a baseline and reports nothing.
        """
        current = self._fs.file_mtimes(self._root, IGNORED_DIRS)
        previous, self._mtimes = self._mtimes, current
        if previous is None:
            logger.debug("Save detector baseline: %d files", len(current))
            return []
        saved = sorted(path for path, mtime in current.items() if previous.get(path) != mtime)
        if saved:
            logger.debug("Detected %d saved file(s)", len(saved))
        return saved
