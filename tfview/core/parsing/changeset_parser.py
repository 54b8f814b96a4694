"""Parser for `tf history /format:detailed` output.

The detailed history format is a sequence of blocks separated by a rule of
79 dashes. Each block looks like:

    Changeset: 42
    User: CONTOSO\\jdoe
    Date: Tuesday, March 6, 2018 10:15:32 AM

    Comment:
      Fix the widget

    Items:
      edit $/Project/src/app.ts

    Check-in Notes:
      Code Reviewer:

Lines are classified by their label prefix at column 0. Sections that
follow a header are the consecutive lines indented by at least two spaces.
Parsing never raises: missing or malformed fields keep their defaults so one
corrupt block does not abort a multi-changeset response.
"""

import logging
import os

from tfview.domain.entities import UNKNOWN_CHANGESET_ID, Changeset, ChangesetItem

logger = logging.getLogger(__name__)

HISTORY_RULE = "-" * 79

SECTION_INDENT = "  "

CHANGESET_LABEL = "Changeset:"
USER_LABEL = "User:"
DATE_LABEL = "Date:"
COMMENT_LABEL = "Comment:"
ITEMS_LABEL = "Items:"


def _label_value(line: str, label: str) -> str:
    """Return the text following a label, without surrounding whitespace."""
    return line[len(label) :].strip()


def _parse_id(value: str) -> int:
    try:
        changeset_id = int(value)
    except ValueError:
        logger.debug("Malformed changeset id %r, using sentinel", value)
        return UNKNOWN_CHANGESET_ID
    return changeset_id if changeset_id >= 0 else UNKNOWN_CHANGESET_ID


def _collect_section(lines: list[str], start: int) -> tuple[list[str], int]:
    """Collect the indented lines of a section.

    Args:
        lines: All lines of the block.
        start: Index of the first line after the section header.

    Returns:
        Tuple of (lines with leading whitespace removed, index of the first
        line that is not part of the section).
    """
    collected: list[str] = []
    index = start
    while index < len(lines) and lines[index].startswith(SECTION_INDENT):
        collected.append(lines[index].lstrip())
        index += 1
    return collected, index


def parse_item(line: str) -> ChangesetItem:
    """Parse one item line ("edit $/Project/file.ts").

    Everything before the first '$' is the change type; the path starts at
    the '$'. A line without '$' is taken as a bare path with no type.
    """
    text = line.strip()
    dollar_index = text.find("$")
    if dollar_index == -1:
        return ChangesetItem(type="", path=text)
    return ChangesetItem(type=text[:dollar_index].strip(), path=text[dollar_index:])


def parse_changeset(raw_block: str) -> Changeset:
    """Parse one detailed history block into a Changeset.

    Args:
        raw_block: Text between two history rules.

    Returns:
        Parsed Changeset. Fields missing from the block keep their defaults.
    """
    lines = raw_block.splitlines()

    changeset_id: int | None = None
    user: str | None = None
    date: str | None = None
    comments: list[str] | None = None
    items: list[ChangesetItem] | None = None

    index = 0
    while index < len(lines):
        line = lines[index]
        index += 1

        if line.startswith(CHANGESET_LABEL) and changeset_id is None:
            changeset_id = _parse_id(_label_value(line, CHANGESET_LABEL))
        elif line.startswith(USER_LABEL) and user is None:
            user = _label_value(line, USER_LABEL)
        elif line.startswith(DATE_LABEL) and date is None:
            date = _label_value(line, DATE_LABEL)
        elif line.startswith(COMMENT_LABEL) and comments is None:
            comments, index = _collect_section(lines, index)
        elif line.startswith(ITEMS_LABEL) and items is None:
            item_lines, index = _collect_section(lines, index)
            items = [parse_item(item_line) for item_line in item_lines]

    return Changeset(
        id=UNKNOWN_CHANGESET_ID if changeset_id is None else changeset_id,
        user=user or "",
        date=date or "",
        comments=os.linesep.join(comments or []),
        items=tuple(items or []),
        raw=raw_block,
    )


def split_history(output: str) -> list[Changeset]:
    """Split detailed history output into parsed changesets.

    Text before the first rule (banners, blank lines) is discarded, as are
    blank sections.

    Args:
        output: Full stdout of `tf history /format:detailed`.

    Returns:
        Changesets in the order tf printed them (newest first).
    """
    sections = output.split(HISTORY_RULE)[1:]
    return [parse_changeset(section) for section in sections if section.strip()]
