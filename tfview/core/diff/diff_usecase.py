"""Diff use case: resolve, stage and open a diff."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from tfview.core.diff.resolver import VersionDiffResolver
from tfview.core.diff.staging import DiffStager
from tfview.core.use_case_errors import format_error_message, log_use_case_error
from tfview.domain.entities import DiffRequest
from tfview.domain.exceptions import InvalidSelectionError
from tfview.ports.diff import DiffViewer

logger = logging.getLogger(__name__)


@dataclass
class DiffResponse:
    """Outcome of a diff command.

    Attributes:
        request: The request handed to the viewer, if one was opened.
        success: Whether the diff was opened.
        error: Error message if it was not.
    """

    request: DiffRequest | None = None
    success: bool = True
    error: str | None = None

    @classmethod
    def create_error(cls, message: str) -> "DiffResponse":
        return cls(success=False, error=message)


class DiffUseCase:
    """Opens file version diffs in the configured viewer."""

    def __init__(
        self,
        resolver: VersionDiffResolver,
        stager: DiffStager,
        viewer: DiffViewer,
    ) -> None:
        self.resolver = resolver
        self.stager = stager
        self.viewer = viewer

    def _open(self, operation: str, build: Callable[[], DiffRequest]) -> DiffResponse:
        try:
            request = build()
            logger.debug("Opening diff %s (%s)", request.title, operation)
            self.viewer.open(request)
            return DiffResponse(request=request)
        except (KeyboardInterrupt, SystemExit):
            raise
        except Exception as e:
            log_use_case_error(e, operation)
            return DiffResponse.create_error(format_error_message(e, operation))

    def diff_previous(self, file_path: str, changeset_id: int) -> DiffResponse:
        """Diff a file at a changeset against its previous version."""

        def build() -> DiffRequest:
            previous = self.resolver.resolve_previous_version(file_path, changeset_id)
            pair = self.resolver.pair_with_previous(file_path, changeset_id, previous)
            left_prefix = previous.version_spec if previous is not None else "empty"
            return self.stager.stage_pair(pair, file_path, left_prefix, f"C{changeset_id}")

        return self._open("diff with previous version", build)

    def diff_selected(self, file_path: str, changeset_ids: Sequence[int]) -> DiffResponse:
        """Diff a file between two selected changesets, the second on the left."""

        def build() -> DiffRequest:
            if len(changeset_ids) != 2:
                raise InvalidSelectionError(
                    f"Select exactly two changesets to compare (got {len(changeset_ids)})",
                    hint="Pass two changeset ids, e.g. 'tfview diff app.ts 37 42'",
                )
            first, second = changeset_ids
            pair = self.resolver.resolve_selected_pair(file_path, first, second)
            return self.stager.stage_pair(pair, file_path, f"C{second}", f"C{first}")

        return self._open("diff between changesets", build)

    def diff_latest(self, server_path: str, changeset_id: int, local_path: Path) -> DiffResponse:
        """Diff a file at a changeset against the workspace copy."""

        def build() -> DiffRequest:
            pair = self.resolver.resolve_against_workspace(server_path, changeset_id, local_path)
            return self.stager.stage_pair(
                pair, server_path, f"C{changeset_id}", local_path=local_path
            )

        return self._open("compare with latest", build)

    def diff_pending(self, local_path: Path) -> DiffResponse:
        """Diff the server's latest version of a file against local edits."""

        def build() -> DiffRequest:
            pair = self.resolver.resolve_pending(local_path)
            return self.stager.stage_pair(pair, str(local_path), "latest", local_path=local_path)

        return self._open("pending change diff", build)
