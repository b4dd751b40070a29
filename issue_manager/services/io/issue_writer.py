"""Write issues in the record file format."""

import logging
from pathlib import Path
from typing import Iterable

from issue_manager.errors import IssueFileError
from issue_manager.models import Issue
from issue_manager.services.io.issue_reader import parse_issues

LOG = logging.getLogger("issue_manager.services.io.issue_writer")


def issues_to_text(issues: Iterable[Issue]) -> str:
    """Concatenate the records of issues.

    Raises IssueFileError if a record would not read back as the same issue
    (e.g. a field changed after construction to text the format cannot hold).
    """
    records = []
    for issue in issues:
        record = issue.to_record()
        try:
            same = parse_issues(record) == [issue]
        except IssueFileError as e:
            raise IssueFileError(f"Issue #{issue.issue_id} cannot be saved: {e}") from e
        if not same:
            raise IssueFileError(f"Issue #{issue.issue_id} cannot be saved: record does not read back unchanged")
        records.append(record)
    return "".join(records)


def write_issues_to_file(path: Path, issues: Iterable[Issue]) -> Path:
    """Write issues to path. Creates parent dirs if needed.

    Nothing is written when any issue fails to serialize.
    """
    path = Path(path)
    text = issues_to_text(issues)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise IssueFileError(f"Unable to save file {path}: {e}") from e
    LOG.debug("Saved issues to %s", path)
    return path
