"""History use case: detailed changeset history of a workspace path."""

import logging
from dataclasses import dataclass, field

from tfview.core.tree.changeset_tree import ChangesetFileTree
from tfview.core.use_case_errors import format_error_message, log_use_case_error
from tfview.domain.entities import Changeset
from tfview.domain.exceptions import HistoryNotFoundError
from tfview.ports.tool import HistorySource

logger = logging.getLogger(__name__)


@dataclass
class HistoryRequest:
    """Request for the history of a path.

    Attributes:
        path: Local or server path of a file or folder.
        count: Maximum number of changesets to list.
        recursive: Include changes to items below a folder.
    """

    path: str
    count: int
    recursive: bool = True


@dataclass
class HistoryResponse:
    """Changesets found for a history request, newest first."""

    changesets: list[Changeset] = field(default_factory=list)
    success: bool = True
    error: str | None = None

    @classmethod
    def create_error(cls, message: str) -> "HistoryResponse":
        return cls(success=False, error=message)


@dataclass
class ChangesetResponse:
    """A single changeset looked up by id."""

    changeset: Changeset | None = None
    success: bool = True
    error: str | None = None

    @property
    def file_tree(self) -> ChangesetFileTree | None:
        """Folder/file tree of the changeset's items."""
        if self.changeset is None:
            return None
        return ChangesetFileTree(self.changeset)

    @classmethod
    def create_error(cls, message: str) -> "ChangesetResponse":
        return cls(success=False, error=message)


class HistoryUseCase:
    """Lists changesets and looks them up by id."""

    def __init__(self, history_source: HistorySource) -> None:
        self.history_source = history_source

    def execute(self, request: HistoryRequest) -> HistoryResponse:
        """List the most recent changesets of a path.

        Args:
            request: Path and count to query.

        Returns:
            HistoryResponse with the changesets, or an error.
        """
        try:
            changesets = self.history_source.history(
                request.path, request.count, recursive=request.recursive
            )
            logger.debug("History of %s: %d changesets", request.path, len(changesets))
            return HistoryResponse(changesets=changesets)
        except (KeyboardInterrupt, SystemExit):
            raise
        except Exception as e:
            log_use_case_error(e, "history")
            return HistoryResponse.create_error(format_error_message(e, "history"))

    def find_changeset(self, path: str, changeset_id: int) -> ChangesetResponse:
        """Look up one changeset of a path by id.

        tf answers a history query anchored at an id with the newest
        changeset at or before it, so the id is checked before returning.

        Args:
            path: Local or server path the changeset touched.
            changeset_id: Changeset number.

        Returns:
            ChangesetResponse holding the changeset, or an error.
        """
        try:
            found = self.history_source.history(path, 1, version=changeset_id, recursive=True)
            if not found or found[0].id != changeset_id:
                raise HistoryNotFoundError(path, changeset_id)
            return ChangesetResponse(changeset=found[0])
        except (KeyboardInterrupt, SystemExit):
            raise
        except Exception as e:
            log_use_case_error(e, "changeset lookup")
            return ChangesetResponse.create_error(format_error_message(e, "changeset lookup"))
