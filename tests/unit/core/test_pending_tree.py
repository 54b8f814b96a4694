"""Tests for the pending changes overlay and explorer."""

import logging
from pathlib import Path
from unittest.mock import Mock

import pytest

from tests.conftest import make_snapshot

from tfview.adapters.fs.local import LocalFileSystem
from tfview.core.pending.repository import PendingChangeRepository
from tfview.core.tree.pending_tree import (
    DIFF_PENDING_COMMAND,
    PendingChangesExplorer,
    PendingChangesOverlay,
)
from tfview.domain.exceptions import FileNotFoundInWorkspace
from tfview.domain.tree import NodeKind, PathTreeNode


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("content\n", encoding="utf-8")
    return path


@pytest.fixture
def tree_root(tmp_path: Path) -> Path:
    """Workspace with pending and unchanged files."""
    root = tmp_path / "ws"
    touch(root / "src" / "App.ts")
    touch(root / "src" / "util.ts")
    touch(root / "src" / "widgets" / "list.ts")
    touch(root / "docs" / "guide.md")
    touch(root / "b.txt")
    touch(root / "A.txt")
    (root / "Zeta").mkdir()
    touch(root / "Zeta" / "z.ts")
    return root


def build_overlay(root: Path, *changed: str) -> PendingChangesOverlay:
    status_source = Mock()
    status_source.status.return_value = make_snapshot(
        *((str(root / relative), "edit") for relative in changed)
    )
    repository = PendingChangeRepository(status_source, root)
    repository.refresh()
    return PendingChangesOverlay(repository, LocalFileSystem())


class TestOverlay:
    """Tests for PendingChangesOverlay."""

    def test_top_level_prunes_directories_without_changes(self, tree_root):
        """Test that only entries with pending changes at or below them show."""
        overlay = build_overlay(tree_root, "src/App.ts", "b.txt")
        assert [n.label for n in overlay.top_level()] == ["src", "b.txt"]

    def test_directories_first_then_case_insensitive_alphabetical(self, tree_root):
        """Test the ordering of a mixed listing."""
        overlay = build_overlay(
            tree_root, "src/App.ts", "Zeta/z.ts", "docs/guide.md", "b.txt", "A.txt"
        )
        assert [n.label for n in overlay.top_level()] == ["docs", "src", "Zeta", "A.txt", "b.txt"]

    def test_children_of_directory(self, tree_root):
        """Test expanding a directory lists its pending entries sorted."""
        overlay = build_overlay(tree_root, "src/util.ts", "src/App.ts", "src/widgets/list.ts")
        src = overlay.top_level()[0]
        nodes = overlay.children(src)
        assert [(n.label, n.kind) for n in nodes] == [
            ("widgets", NodeKind.DIRECTORY),
            ("App.ts", NodeKind.FILE),
            ("util.ts", NodeKind.FILE),
        ]

    def test_file_nodes_carry_pending_change(self, tree_root):
        """Test that a file node's record is its pending change."""
        overlay = build_overlay(tree_root, "b.txt")
        node = overlay.top_level()[0]
        assert node.record is not None
        assert node.record.action == "edit"

    def test_matching_is_case_insensitive(self, tree_root):
        """Test that tf reporting a differently cased path still matches."""
        status_source = Mock()
        status_source.status.return_value = make_snapshot(
            (str(tree_root / "SRC" / "app.TS"), "edit")
        )
        repository = PendingChangeRepository(status_source, tree_root)
        repository.refresh()
        overlay = PendingChangesOverlay(repository, LocalFileSystem())
        src = overlay.top_level()[0]
        assert [n.label for n in overlay.children(src)] == ["App.ts"]

    def test_no_changes_shows_nothing(self, tree_root):
        assert build_overlay(tree_root).top_level() == []

    def test_file_has_no_children(self, tree_root):
        overlay = build_overlay(tree_root, "b.txt")
        assert overlay.children(overlay.top_level()[0]) == []

    def test_vanished_directory_raises_not_found(self, tree_root):
        """Test that the overlay lets filesystem not-found errors propagate."""
        overlay = build_overlay(tree_root, "src/App.ts")
        ghost = PathTreeNode(label="gone", kind=NodeKind.DIRECTORY, path=str(tree_root / "gone"))
        with pytest.raises(FileNotFoundInWorkspace):
            overlay.children(ghost)

    def test_file_descriptor_selects_pending_diff(self, tree_root):
        """Test that a file's selection command diffs it against the server."""
        overlay = build_overlay(tree_root, "b.txt")
        descriptor = overlay.describe(overlay.top_level()[0])
        assert descriptor.selection_command == DIFF_PENDING_COMMAND
        assert descriptor.command_arguments == (str(tree_root / "b.txt"),)
        assert descriptor.label == "b.txt [edit]"


class TestExplorer:
    """Tests for PendingChangesExplorer expansion."""

    def test_expands_nested_directories(self, tree_root):
        """Test the fully expanded pending tree."""
        overlay = build_overlay(tree_root, "src/widgets/list.ts", "b.txt")
        expanded = PendingChangesExplorer(overlay).expand()
        assert [n.descriptor.label for n in expanded] == ["src", "b.txt [edit]"]
        widgets = expanded[0].children[0]
        assert widgets.descriptor.label == "widgets"
        assert [c.descriptor.label for c in widgets.children] == ["list.ts [edit]"]

    def test_vanished_directory_is_dropped(self, tree_root, caplog):
        """Test that a directory deleted after listing is removed from the tree."""
        overlay = Mock(wraps=build_overlay(tree_root, "src/App.ts", "b.txt"))
        original_children = overlay.children

        def children(node):
            if node.label == "src":
                raise FileNotFoundInWorkspace(node.path)
            return original_children(node)

        overlay.children = children

        with caplog.at_level(logging.DEBUG, logger="tfview.core.tree.pending_tree"):
            expanded = PendingChangesExplorer(overlay).expand()

        assert [n.descriptor.label for n in expanded] == ["b.txt [edit]"]
        assert "vanished" in caplog.text
