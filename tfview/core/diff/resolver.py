"""Version/diff resolver.

Turns "diff this file at this changeset" style requests into a pair of
content snapshots, fetching each side through the history and content ports.
Every fetch runs after the previous one completes and errors propagate from
whichever step fails.
"""

import logging
from pathlib import Path

from tfview.domain.entities import Changeset, DiffPair
from tfview.domain.exceptions import HistoryNotFoundError
from tfview.ports.fs import FileSystem
from tfview.ports.tool import ContentSource, HistorySource

logger = logging.getLogger(__name__)

# The anchored changeset plus its predecessor
PREDECESSOR_QUERY_LIMIT = 2


def version_label(path: str, changeset_id: int) -> str:
    return f"{path};C{changeset_id}"


class VersionDiffResolver:
    """Resolves the two sides of a diff."""

    def __init__(
        self,
        history_source: HistorySource,
        content_source: ContentSource,
        fs: FileSystem,
    ) -> None:
        """Initialize the resolver.

        Args:
            history_source: Answers `tf history` queries.
            content_source: Answers `tf view` queries.
            fs: Reads the workspace copy of a file.
        """
        self.history_source = history_source
        self.content_source = content_source
        self.fs = fs

    def resolve_previous_version(self, file_path: str, changeset_id: int) -> Changeset | None:
        """Find the changeset that last touched a file before the given one.

        Args:
            file_path: Server or local path of the file.
            changeset_id: Changeset the file was selected in.

        Returns:
            The predecessor changeset, or None if the file was introduced
            in changeset_id.

        Raises:
            HistoryNotFoundError: If tf returns no history at all.
        """
        history = self.history_source.history(
            file_path,
            PREDECESSOR_QUERY_LIMIT,
            version=changeset_id,
            recursive=False,
        )
        if not history:
            raise HistoryNotFoundError(file_path, changeset_id)
        if len(history) == 1:
            logger.debug("%s has no version before C%d", file_path, changeset_id)
            return None
        return history[1]

    def resolve_pair(self, file_path: str, changeset_id: int) -> DiffPair:
        """Content of a file at a changeset and at its predecessor.

        The predecessor side is fetched at the path the predecessor recorded
        for the file, so a renamed file still resolves. A file added in
        changeset_id gets empty left content.
        """
        previous = self.resolve_previous_version(file_path, changeset_id)
        return self.pair_with_previous(file_path, changeset_id, previous)

    def pair_with_previous(
        self,
        file_path: str,
        changeset_id: int,
        previous: Changeset | None,
    ) -> DiffPair:
        """Content pair for an already resolved predecessor."""
        right = self.content_source.view(file_path, f"C{changeset_id}")
        if previous is None:
            return DiffPair(
                left="",
                right=right,
                left_label=f"{file_path} (added)",
                right_label=version_label(file_path, changeset_id),
            )

        previous_path = previous.items[0].path if previous.items else file_path
        left = self.content_source.view(previous_path, previous.version_spec)
        return DiffPair(
            left=left,
            right=right,
            left_label=version_label(previous_path, previous.id),
            right_label=version_label(file_path, changeset_id),
        )

    def resolve_selected_pair(self, file_path: str, first_id: int, second_id: int) -> DiffPair:
        """Content of a file at two selected changesets.

        The second selection is the left side and the first the right,
        whichever id is lower.
        """
        left = self.content_source.view(file_path, f"C{second_id}")
        right = self.content_source.view(file_path, f"C{first_id}")
        return DiffPair(
            left=left,
            right=right,
            left_label=version_label(file_path, second_id),
            right_label=version_label(file_path, first_id),
        )

    def resolve_against_workspace(
        self,
        server_path: str,
        changeset_id: int,
        local_path: Path,
    ) -> DiffPair:
        """Content of a file at a changeset versus the workspace copy.

        Raises:
            FileNotFoundInWorkspace: If the local file does not exist.
        """
        left = self.content_source.view(server_path, f"C{changeset_id}")
        right = self.fs.read_text(local_path)
        return DiffPair(
            left=left,
            right=right,
            left_label=version_label(server_path, changeset_id),
            right_label=str(local_path),
        )

    def resolve_pending(self, local_path: Path) -> DiffPair:
        """Latest server content of a file versus its pending local edits.

        Raises:
            FileNotFoundInWorkspace: If the local file does not exist.
        """
        left = self.content_source.view(str(local_path))
        right = self.fs.read_text(local_path)
        return DiffPair(
            left=left,
            right=right,
            left_label=f"{local_path.name} (server)",
            right_label=f"{local_path.name} (local)",
        )
