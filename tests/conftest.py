"""Pytest configuration and shared fixtures."""

import json
import stat
import sys
from pathlib import Path

import pytest

from tfview.domain.entities import Changeset, ChangesetItem, PendingChange, StatusSnapshot

FIXTURES_DIR = Path(__file__).parent / "fixtures"

HISTORY_RULE = "-" * 79


def load_fixture(name: str) -> str:
    """Read a text fixture from tests/fixtures."""
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


# ============================================================================
# Config Isolation
# ============================================================================
# The global config lives in the user's home directory. Point it at a
# per-test directory so a developer's own config never leaks into tests.


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect the global config location to a temporary directory."""
    config_home = tmp_path / "global-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("APPDATA", str(config_home))
    return config_home / "tfview" / "config.toml"


# ============================================================================
# Record Builders
# ============================================================================


def make_changeset(changeset_id: int, *paths: str, comment: str = "") -> Changeset:
    """Build a changeset whose items are edits of the given server paths."""
    return Changeset(
        id=changeset_id,
        user="CONTOSO\\jdoe",
        date="Tuesday, March 6, 2018 10:15:32 AM",
        comments=comment,
        items=tuple(ChangesetItem(type="edit", path=path) for path in paths),
    )


def make_snapshot(*changes: tuple[str, str]) -> StatusSnapshot:
    """Build a status snapshot from (local path, action) pairs."""
    return StatusSnapshot(
        has_pending_changes=bool(changes),
        changes=tuple(
            PendingChange(file_path=path, file_name=Path(path).name, action=action)
            for path, action in changes
        ),
    )


@pytest.fixture
def history_output() -> str:
    """Known-good `tf history /format:detailed` output with three changesets."""
    return load_fixture("history_detailed.txt")


# ============================================================================
# Fake tf Executable
# ============================================================================
# Integration tests run the real TfAdapter against a script that answers
# like tf. The script echoes canned responses keyed by command name and
# records every invocation so tests can assert on the arguments.


FAKE_TF_TEMPLATE = """\
#!{python}
import json
import pathlib
import sys

responses = json.loads(pathlib.Path({responses!r}).read_text(encoding="utf-8"))
with open({log!r}, "a", encoding="utf-8") as log:
    log.write(json.dumps(sys.argv[1:]) + "\\n")

command = sys.argv[1] if len(sys.argv) > 1 else ""
entries = responses.get(command, [])
matches = [entry for entry in entries if entry["when"] in sys.argv[2:]]
matches += [entry for entry in entries if entry["when"] is None]
fallback = {{"stdout": "", "stderr": "unknown command", "exit_code": 100}}
response = matches[0] if matches else fallback
sys.stdout.write(response["stdout"])
sys.stderr.write(response["stderr"])
sys.exit(response["exit_code"])
"""


class FakeTf:
    """A scriptable stand-in for the tf executable."""

    def __init__(self, directory: Path) -> None:
        self.path = directory / "tf"
        self.responses_path = directory / "responses.json"
        self.log_path = directory / "calls.log"
        self.responses: dict[str, list[dict[str, object]]] = {}
        self._save()
        self.path.write_text(
            FAKE_TF_TEMPLATE.format(
                python=sys.executable,
                responses=str(self.responses_path),
                log=str(self.log_path),
            ),
            encoding="utf-8",
        )
        self.path.chmod(self.path.stat().st_mode | stat.S_IEXEC)

    def _save(self) -> None:
        self.responses_path.write_text(json.dumps(self.responses), encoding="utf-8")

    def respond(
        self,
        command: str,
        stdout: str = "",
        stderr: str = "",
        exit_code: int = 0,
        when: str | None = None,
    ) -> None:
        """Add a canned response for a tf command.

        A response with a `when` argument only answers invocations passing
        that exact argument, and wins over responses without one.
        """
        entry = {"stdout": stdout, "stderr": stderr, "exit_code": exit_code, "when": when}
        self.responses.setdefault(command, []).append(entry)
        self._save()

    @property
    def calls(self) -> list[list[str]]:
        """Argument lists of every invocation, oldest first."""
        if not self.log_path.exists():
            return []
        lines = self.log_path.read_text(encoding="utf-8").splitlines()
        return [json.loads(line) for line in lines]


@pytest.fixture
def fake_tf(tmp_path: Path) -> FakeTf:
    """Fake tf executable in a temporary directory (POSIX only)."""
    if sys.platform == "win32":
        pytest.skip("fake tf script requires a POSIX shebang")
    directory = tmp_path / "fake-tf"
    directory.mkdir()
    return FakeTf(directory)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """An empty local workspace root with a .tfview marker."""
    root = tmp_path / "workspace"
    (root / ".tfview").mkdir(parents=True)
    return root


def status_table(*rows: tuple[str, str, str]) -> str:
    """Render `tf status` output for (file name, change, local path) rows."""
    name_width = max([len("File name")] + [len(row[0]) for row in rows])
    change_width = max([len("Change")] + [len(row[1]) for row in rows])
    path_width = max([len("Local path")] + [len(row[2]) for row in rows])
    lines = [
        f"{'File name':<{name_width}} {'Change':<{change_width}} Local path",
        f"{'-' * name_width} {'-' * change_width} {'-' * path_width}",
        "$/Project/src",
    ]
    lines += [f"{name:<{name_width}} {change:<{change_width}} {path}" for name, change, path in rows]
    lines += ["", f"{len(rows)} change(s)", ""]
    return "\n".join(lines)
