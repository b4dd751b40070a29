"""Issue record file reading and writing."""

from issue_manager.services.io.issue_reader import parse_issues, read_issues_from_file
from issue_manager.services.io.issue_writer import issues_to_text, write_issues_to_file

__all__ = [
    "issues_to_text",
    "parse_issues",
    "read_issues_from_file",
    "write_issues_to_file",
]
