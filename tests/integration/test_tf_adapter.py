"""Integration tests for TfAdapter against a fake tf executable."""

import stat
import sys
from pathlib import Path

import pytest

from tests.conftest import status_table

from tfview.adapters.tf_cmd import tf_adapter
from tfview.adapters.tf_cmd.tf_adapter import TfAdapter, resolve_tf_path
from tfview.domain.entities import RunOptions, ToolCommand
from tfview.domain.exceptions import ToolCommandError, ToolPathUnknownError, ToolProcessError
from tfview.ports.tool import ToolRunner


@pytest.fixture
def adapter(fake_tf, workspace: Path) -> TfAdapter:
    return TfAdapter(workspace, tf_path=str(fake_tf.path))


class TestResolveTfPath:
    """Tests for locating the tf executable."""

    def test_configured_path(self, fake_tf):
        assert resolve_tf_path(str(fake_tf.path)) == fake_tf.path

    def test_configured_path_missing(self, tmp_path):
        with pytest.raises(ToolPathUnknownError) as exc_info:
            resolve_tf_path(str(tmp_path / "nope" / "tf"))
        assert exc_info.value.tf_path == str(tmp_path / "nope" / "tf")

    def test_found_on_path(self, fake_tf, monkeypatch):
        monkeypatch.setenv("PATH", str(fake_tf.path.parent))
        assert resolve_tf_path() == fake_tf.path

    def test_not_found_anywhere(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PATH", str(tmp_path / "empty"))
        monkeypatch.setattr(tf_adapter, "DEFAULT_TF_PATH", str(tmp_path / "TF.exe"))
        with pytest.raises(ToolPathUnknownError, match="Path to tf executable is unknown"):
            resolve_tf_path()


class TestRunContract:
    """Tests for the raw runner contract."""

    def test_non_zero_exit_is_returned(self, adapter, fake_tf):
        runner: ToolRunner = adapter
        fake_tf.respond("get", "partial\n", "TF10141: conflict\n", exit_code=1)

        output = runner.run(ToolCommand.GET, ["$/Project"])

        assert (output.stdout, output.stderr, output.exit_code) == (
            "partial\n",
            "TF10141: conflict\n",
            1,
        )

    def test_recursive_option(self, adapter, fake_tf):
        runner: ToolRunner = adapter
        fake_tf.respond("undo")
        runner.run(ToolCommand.UNDO, ["a.ts"], RunOptions(recursive=True))
        assert fake_tf.calls == [["undo", "a.ts", "/recursive"]]

    def test_runs_in_workspace_root(self, adapter, workspace):
        assert adapter.workspace_root == workspace.resolve()


class TestStatus:
    """Tests for tf status."""

    def test_pending_changes(self, adapter, fake_tf, workspace):
        fake_tf.respond(
            "status",
            status_table(
                ("app.ts", "edit", str(workspace / "src" / "app.ts")),
                ("new.ts", "add", str(workspace / "src" / "new.ts")),
            ),
        )

        snapshot = adapter.status(str(workspace))

        assert snapshot.has_pending_changes
        assert [(c.file_name, c.action) for c in snapshot.changes] == [
            ("app.ts", "edit"),
            ("new.ts", "add"),
        ]
        assert fake_tf.calls == [["status", str(workspace), "/recursive"]]

    def test_nothing_pending(self, adapter, fake_tf, workspace):
        """Test that the no-changes message wins over the exit code."""
        fake_tf.respond("status", "There are no pending changes.\n", exit_code=1)
        assert not adapter.status(str(workspace)).has_pending_changes

    def test_failure(self, adapter, fake_tf, workspace):
        fake_tf.respond("status", stderr="TF30063: You are not authorized.\n", exit_code=100)
        with pytest.raises(ToolCommandError) as exc_info:
            adapter.status(str(workspace))
        assert exc_info.value.exit_code == 100
        assert "TF30063" in exc_info.value.message


class TestHistory:
    """Tests for tf history."""

    def test_detailed_history(self, adapter, fake_tf, history_output):
        fake_tf.respond("history", history_output)

        changesets = adapter.history("$/Project", 3)

        assert [c.id for c in changesets] == [42, 37, 12]
        assert fake_tf.calls == [
            ["history", "$/Project", "/format:detailed", "/stopafter:3", "/recursive"]
        ]

    def test_anchored_non_recursive(self, adapter, fake_tf, history_output):
        fake_tf.respond("history", history_output)
        adapter.history("$/Project/src/app.ts", 2, version=42, recursive=False)
        assert fake_tf.calls == [
            ["history", "$/Project/src/app.ts", "/format:detailed", "/stopafter:2", "/version:42"]
        ]

    def test_no_entries(self, adapter, fake_tf):
        fake_tf.respond(
            "history",
            stderr="No history entries were found for the item and version combination specified.\n",
            exit_code=1,
        )
        assert adapter.history("$/Project/none.ts", 2) == []


class TestView:
    """Tests for tf view."""

    def test_view_version(self, adapter, fake_tf):
        fake_tf.respond("view", "old\n", when="/version:C37")
        fake_tf.respond("view", "latest\n")

        assert adapter.view("$/Project/a.ts", "C37") == "old\n"
        assert adapter.view("$/Project/a.ts") == "latest\n"
        assert fake_tf.calls == [
            ["view", "$/Project/a.ts", "/console", "/version:C37"],
            ["view", "$/Project/a.ts", "/console"],
        ]

    def test_view_failure(self, adapter, fake_tf):
        fake_tf.respond("view", stderr="TF10122: The path does not exist.\n", exit_code=100)
        with pytest.raises(ToolCommandError, match="TF10122"):
            adapter.view("$/Project/gone.ts", "C1")


class TestWorkspaceCommands:
    """Tests for get, checkout and undo."""

    def test_get(self, adapter, fake_tf):
        fake_tf.respond("get", "All files are up to date.\n")

        result = adapter.get("$/Project")

        assert result.success
        assert result.command is ToolCommand.GET
        assert result.stdout == "All files are up to date.\n"
        assert fake_tf.calls == [["get", "$/Project", "/noprompt", "/recursive"]]

    def test_checkout(self, adapter, fake_tf):
        fake_tf.respond("checkout", "a.ts\n")
        result = adapter.checkout("a.ts")
        assert result.message == "All files checked out successfully"
        assert fake_tf.calls == [["checkout", "a.ts"]]

    def test_undo_failure_uses_first_error_line(self, adapter, fake_tf):
        fake_tf.respond(
            "undo", stderr="\nNo pending changes were found for a.ts.\nmore\n", exit_code=1
        )

        result = adapter.undo("a.ts", recursive=False)

        assert not result.success
        assert result.exit_code == 1
        assert result.message == "No pending changes were found for a.ts."
        assert fake_tf.calls == [["undo", "a.ts", "/noprompt"]]


class TestProcessFailures:
    """Tests for tf processes that cannot run to completion."""

    def test_executable_removed(self, adapter, fake_tf):
        fake_tf.path.unlink()
        with pytest.raises(ToolProcessError, match="tf executable not found") as exc_info:
            adapter.view("$/Project/a.ts")
        assert exc_info.value.hint

    @pytest.mark.skipif(sys.platform == "win32", reason="requires a POSIX shell")
    def test_timeout(self, tmp_path, workspace):
        slow = tmp_path / "slow-tf"
        slow.write_text("#!/bin/sh\nexec sleep 5\n", encoding="utf-8")
        slow.chmod(slow.stat().st_mode | stat.S_IEXEC)
        adapter = TfAdapter(workspace, tf_path=str(slow), command_timeout=0.2)

        with pytest.raises(ToolProcessError, match="did not finish within 0.2s"):
            adapter.status(str(workspace))
