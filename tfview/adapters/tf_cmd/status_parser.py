"""Parser for `tf status` output.

tf prints pending changes as a table whose columns are defined by the dash
groups of the rule under the header:

    File name Change Local path
    --------- ------ -------------------------------
    $/Project/src
    app.ts    edit   C:\\Dev\\Project\\src\\app.ts

    1 change(s)

Server folder lines ($/...) group the rows and are skipped. Local workspaces
add "Included changes:" and "Detected changes:" headings; only included
changes are reported.
"""

import ntpath
import re

from tfview.domain.entities import PendingChange, StatusSnapshot

NO_PENDING_CHANGES = "There are no pending changes."

_RULE_PATTERN = re.compile(r"^-+(?: +-+)*\s*$")
_DASH_GROUP = re.compile(r"-+")
_SUMMARY_PATTERN = re.compile(r"^\d+ (?:detected )?change\(s\)", re.IGNORECASE)
_DETECTED_HEADING = "detected changes"


def _column_spans(rule_line: str) -> list[tuple[int, int | None]]:
    """Derive column spans from a dash rule; the last column is open-ended."""
    spans: list[tuple[int, int | None]] = [
        (match.start(), match.end()) for match in _DASH_GROUP.finditer(rule_line)
    ]
    if spans:
        spans[-1] = (spans[-1][0], None)
    return spans


def _parse_row(line: str, spans: list[tuple[int, int | None]]) -> PendingChange | None:
    name_start, name_end = spans[0]
    action_start, action_end = spans[1]
    path_start, _ = spans[-1]

    file_name = line[name_start:name_end].strip()
    action = line[action_start:action_end].strip()
    file_path = line[path_start:].strip()
    if not file_path:
        return None
    if not file_name:
        file_name = ntpath.basename(file_path)
    return PendingChange(file_path=file_path, file_name=file_name, action=action)


def parse_status(output: str) -> StatusSnapshot:
    """Parse `tf status` output into a StatusSnapshot.

    Args:
        output: Full stdout of `tf status`.

    Returns:
        StatusSnapshot. has_pending_changes is False when tf reported that
        nothing is pending.

    Raises:
        ValueError: If the output is neither a change table nor the
            no-pending-changes message.
    """
    if NO_PENDING_CHANGES in output:
        return StatusSnapshot(has_pending_changes=False)

    lines = output.splitlines()
    rule_index = next(
        (i for i, line in enumerate(lines) if _RULE_PATTERN.match(line)),
        None,
    )
    if rule_index is None:
        raise ValueError("Unrecognized tf status output: no column rule found")

    spans = _column_spans(lines[rule_index])
    if len(spans) < 3:
        raise ValueError(
            f"Unrecognized tf status output: expected 3 columns, found {len(spans)}"
        )

    changes: list[PendingChange] = []
    for line in lines[rule_index + 1 :]:
        stripped = line.strip()
        if not stripped or stripped.startswith("$/"):
            continue
        if stripped.lower().startswith(_DETECTED_HEADING) or _SUMMARY_PATTERN.match(stripped):
            break
        change = _parse_row(line, spans)
        if change is not None:
            changes.append(change)

    return StatusSnapshot(has_pending_changes=bool(changes), changes=tuple(changes))
