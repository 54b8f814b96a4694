"""Stages diff content as files so any viewer can open it."""

import logging
from pathlib import Path

from tfview.domain.entities import DiffPair, DiffRequest, DiffSource
from tfview.ports.fs import FileSystem

logger = logging.getLogger(__name__)


def base_name(path: str) -> str:
    """Final segment of a local or server path."""
    return path.replace("\\", "/").rpartition("/")[2]


def staged_file_name(prefix: str, path: str) -> str:
    """Temp file name for one side of a diff ("C42" + "app.ts" -> "C42app.ts")."""
    return f"{prefix}{base_name(path)}"


class DiffStager:
    """Writes resolved content to the staging directory.

    Staged files are overwritten by the next diff of the same file and
    version. They are left on disk for external viewers that read them after
    tfview returns.
    """

    def __init__(self, fs: FileSystem) -> None:
        self.fs = fs

    def stage(self, name: str, content: str, label: str) -> DiffSource:
        path = self.fs.temp_dir() / name
        self.fs.write_text(path, content)
        logger.debug("Staged %d characters at %s", len(content), path)
        return DiffSource(label=label, path=str(path), is_temporary=True)

    def stage_pair(
        self,
        pair: DiffPair,
        file_path: str,
        left_prefix: str,
        right_prefix: str = "",
        local_path: Path | None = None,
        title: str = "",
    ) -> DiffRequest:
        """Build a diff request from a resolved pair.

        Args:
            pair: Resolved content of both sides.
            file_path: Path the staged names are derived from.
            left_prefix: Version prefix of the left staged file (e.g. "C37").
            right_prefix: Version prefix of the right staged file.
            local_path: Workspace file holding the right side. When given the
                right side is opened in place instead of being staged.
            title: Title for the viewer. Defaults to the pair's labels.

        Returns:
            Request naming the two sources.
        """
        left = self.stage(staged_file_name(left_prefix, file_path), pair.left, pair.left_label)
        if local_path is not None:
            right = DiffSource(label=pair.right_label, path=str(local_path))
        else:
            right = self.stage(
                staged_file_name(right_prefix, file_path), pair.right, pair.right_label
            )
        return DiffRequest(
            left=left,
            right=right,
            title=title or f"{pair.left_label} <-> {pair.right_label}",
        )
