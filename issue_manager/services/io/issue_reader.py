"""Read issues from the record file format.

A record starts with a '*' header line:
    *id,state,kind,summary,owner-or-null,confirmed,resolution
followed by note lines starting with '-'. Lines that start with neither
continue the previous note.
"""

import logging
from pathlib import Path
from typing import List

from issue_manager.errors import IssueConstructionError, IssueFileError
from issue_manager.models import Issue
from issue_manager.models.fields import NULL_OWNER

RECORD_MARKER = "*"
NOTE_MARKER = "-"
HEADER_FIELDS = 7

LOG = logging.getLogger("issue_manager.services.io.issue_reader")


def read_issues_from_file(path: Path) -> List[Issue]:
    """Load all issues from path. Raises IssueFileError if unreadable or malformed."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise IssueFileError(f"Unable to load file {path}: {e}") from e
    issues = parse_issues(text)
    LOG.debug("Read %s issues from %s", len(issues), path)
    return issues


def parse_issues(text: str) -> List[Issue]:
    """Parse record text into issues (in file order)."""
    return [_parse_record(lines) for lines in _split_records(text)]


def _split_records(text: str) -> List[List[str]]:
    records: List[List[str]] = []
    for line in text.splitlines():
        if line.startswith(RECORD_MARKER):
            records.append([line])
        elif records:
            records[-1].append(line)
        elif line.strip():
            raise IssueFileError(f"Unexpected text before first record: {line!r}")
    return records


def _parse_record(lines: List[str]) -> Issue:
    header = lines[0][len(RECORD_MARKER) :]
    fields = header.split(",")
    if len(fields) == HEADER_FIELDS - 1:
        fields.append("")
    if len(fields) != HEADER_FIELDS:
        raise IssueFileError(f"Expected {HEADER_FIELDS} header fields, got {len(fields)}: {header!r}")
    raw_id, state, kind, summary, owner, raw_confirmed, resolution = fields

    try:
        issue_id = int(raw_id)
    except ValueError as e:
        raise IssueFileError(f"Invalid issue id {raw_id!r}") from e

    confirmed_text = raw_confirmed.strip().lower()
    if confirmed_text not in ("true", "false"):
        raise IssueFileError(f"Invalid confirmed flag {raw_confirmed!r} for issue #{issue_id}")

    notes = _parse_notes(lines[1:], issue_id)
    try:
        return Issue.from_fields(
            issue_id=issue_id,
            state=state,
            kind=kind,
            summary=summary,
            owner=None if owner == NULL_OWNER else owner,
            confirmed=confirmed_text == "true",
            resolution=resolution,
            notes=notes,
        )
    except IssueConstructionError as e:
        raise IssueFileError(f"Invalid issue #{issue_id}: {e}") from e


def _parse_notes(lines: List[str], issue_id: int) -> List[str]:
    notes: List[str] = []
    for line in lines:
        if line.startswith(NOTE_MARKER):
            notes.append(line[len(NOTE_MARKER) :])
        elif notes:
            notes[-1] += "\n" + line
        elif line.strip():
            raise IssueFileError(f"Issue #{issue_id}: text before first note: {line!r}")
    return [note.rstrip() for note in notes]
