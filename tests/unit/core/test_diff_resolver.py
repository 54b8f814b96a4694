"""Tests for VersionDiffResolver."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from tests.conftest import make_changeset

from tfview.core.diff.resolver import VersionDiffResolver
from tfview.domain.entities import DiffPair
from tfview.domain.exceptions import (
    FileNotFoundInWorkspace,
    HistoryNotFoundError,
    ToolCommandError,
)

FILE = "$/Project/src/app.ts"


def content_at(path: str, version: str | None = None) -> str:
    return f"{path}@{version or 'latest'}"


@pytest.fixture
def history_source() -> Mock:
    return Mock()


@pytest.fixture
def content_source() -> Mock:
    source = Mock()
    source.view.side_effect = content_at
    return source


@pytest.fixture
def fs() -> Mock:
    fs = Mock()
    fs.read_text.return_value = "local edits"
    return fs


@pytest.fixture
def resolver(history_source, content_source, fs) -> VersionDiffResolver:
    return VersionDiffResolver(history_source, content_source, fs)


class TestResolvePreviousVersion:
    """Tests for resolve_previous_version."""

    def test_second_result_is_predecessor(self, resolver, history_source):
        """Test that the older of two results is returned."""
        previous = make_changeset(37, FILE)
        history_source.history.return_value = [make_changeset(42, FILE), previous]
        assert resolver.resolve_previous_version(FILE, 42) == previous

    def test_queries_anchored_history_of_two(self, resolver, history_source):
        """Test the history query shape."""
        history_source.history.return_value = [make_changeset(42, FILE)]
        resolver.resolve_previous_version(FILE, 42)
        history_source.history.assert_called_once_with(FILE, 2, version=42, recursive=False)

    def test_single_result_means_added(self, resolver, history_source):
        """Test that a file introduced in the changeset has no predecessor."""
        history_source.history.return_value = [make_changeset(42, FILE)]
        assert resolver.resolve_previous_version(FILE, 42) is None

    def test_no_results_raises(self, resolver, history_source):
        """Test that an empty history is reported as not found."""
        history_source.history.return_value = []
        with pytest.raises(HistoryNotFoundError) as exc_info:
            resolver.resolve_previous_version(FILE, 42)
        assert exc_info.value.changeset_id == 42


class TestResolvePair:
    """Tests for resolve_pair."""

    def test_one_record_gives_empty_left(self, resolver, history_source):
        """Test ("", content@42) for a file added in changeset 42."""
        history_source.history.return_value = [make_changeset(42, FILE)]
        pair = resolver.resolve_pair(FILE, 42)
        assert (pair.left, pair.right) == ("", f"{FILE}@C42")

    def test_two_records_give_predecessor_content(self, resolver, history_source):
        """Test (content@37, content@42) when 37 precedes 42."""
        history_source.history.return_value = [
            make_changeset(42, FILE),
            make_changeset(37, FILE),
        ]
        pair = resolver.resolve_pair(FILE, 42)
        assert (pair.left, pair.right) == (f"{FILE}@C37", f"{FILE}@C42")
        assert pair.left_label == f"{FILE};C37"
        assert pair.right_label == f"{FILE};C42"

    def test_predecessor_fetched_at_its_own_path(self, resolver, history_source):
        """Test that a renamed file's old version is fetched at the old path."""
        old_path = "$/Project/src/legacy.ts"
        history_source.history.return_value = [
            make_changeset(42, FILE),
            make_changeset(37, old_path),
        ]
        pair = resolver.resolve_pair(FILE, 42)
        assert pair.left == f"{old_path}@C37"

    def test_predecessor_without_items_uses_file_path(self, resolver, history_source):
        history_source.history.return_value = [make_changeset(42, FILE), make_changeset(37)]
        assert resolver.resolve_pair(FILE, 42).left == f"{FILE}@C37"

    def test_view_error_propagates(self, resolver, history_source, content_source):
        """Test that a failing fetch stops the sequence with its error."""
        history_source.history.return_value = [make_changeset(42, FILE)]
        content_source.view.side_effect = ToolCommandError("view", 100, "TF10122: not found")
        with pytest.raises(ToolCommandError):
            resolver.resolve_pair(FILE, 42)


class TestOtherPairs:
    """Tests for selected, workspace and pending pairs."""

    def test_selected_pair_puts_second_selection_left(self, resolver):
        """Test that the second selection is the left side and the first the right."""
        pair = resolver.resolve_selected_pair(FILE, 42, 37)
        assert pair == DiffPair(
            left=f"{FILE}@C37",
            right=f"{FILE}@C42",
            left_label=f"{FILE};C37",
            right_label=f"{FILE};C42",
        )

    def test_selected_pair_order_is_not_by_id(self, resolver):
        """Test that picking the older changeset first puts the newer one left."""
        pair = resolver.resolve_selected_pair(FILE, 37, 42)
        assert (pair.left, pair.right) == (f"{FILE}@C42", f"{FILE}@C37")

    def test_against_workspace(self, resolver, fs):
        """Test changeset version on the left and the local file on the right."""
        local = Path("/ws/src/app.ts")
        pair = resolver.resolve_against_workspace(FILE, 37, local)
        assert (pair.left, pair.right) == (f"{FILE}@C37", "local edits")
        fs.read_text.assert_called_once_with(local)

    def test_pending(self, resolver, content_source):
        """Test server latest on the left and local edits on the right."""
        local = Path("/ws/src/app.ts")
        pair = resolver.resolve_pending(local)
        assert (pair.left, pair.right) == (f"{local}@latest", "local edits")
        content_source.view.assert_called_once_with(str(local))

    def test_pending_missing_local_file(self, resolver, fs):
        fs.read_text.side_effect = FileNotFoundInWorkspace("/ws/gone.ts")
        with pytest.raises(FileNotFoundInWorkspace):
            resolver.resolve_pending(Path("/ws/gone.ts"))
