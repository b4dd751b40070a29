"""Facade over one IssueList: file load/save, lookups, commands."""

import logging
from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from issue_manager.models import Command, Issue, IssueKind
from issue_manager.services.io import read_issues_from_file, write_issues_to_file
from issue_manager.services.store.issue_list import IssueList

LOG = logging.getLogger("issue_manager.services.store.issue_manager")


class IssueRow(BaseModel):
    """Display row for one issue."""

    model_config = ConfigDict(frozen=True)

    issue_id: int = Field(..., description="Issue id")
    state: str = Field(..., description="State name")
    kind: str = Field(..., description="Kind name")
    summary: str = Field(..., description="Issue summary")

    @classmethod
    def from_issue(cls, issue: Issue) -> "IssueRow":
        return cls(
            issue_id=issue.issue_id,
            state=issue.state.value,
            kind=issue.kind.value,
            summary=issue.summary,
        )


class IssueManager:
    """Owns the current IssueList. Built explicitly by the host."""

    def __init__(self, issue_list: IssueList | None = None) -> None:
        self._issue_list = issue_list if issue_list is not None else IssueList()

    @property
    def issue_list(self) -> IssueList:
        return self._issue_list

    def save_issues_to_file(self, path: Path) -> Path:
        """Write all issues to path."""
        out = write_issues_to_file(path, self._issue_list.get_issues())
        LOG.info("Saved %s issues to %s", len(self._issue_list), out)
        return out

    def load_issues_from_file(self, path: Path) -> None:
        """Replace the current list with the issues in path.

        The file is parsed completely first; on error the current list is kept.
        """
        issues = read_issues_from_file(path)
        issue_list = IssueList()
        issue_list.add_issues(issues)
        self._issue_list = issue_list
        LOG.info("Loaded %s issues from %s", len(issue_list), path)

    def create_new_issue_list(self) -> None:
        self._issue_list = IssueList()

    def get_issue_list_as_rows(self, kind: IssueKind | str | None = None) -> List[IssueRow]:
        """Rows (id, state, kind, summary), optionally filtered by kind."""
        if kind is None:
            issues = self._issue_list.get_issues()
        else:
            issues = self._issue_list.get_issues_by_kind(kind)
        return [IssueRow.from_issue(issue) for issue in issues]

    def get_issue_by_id(self, issue_id: int) -> Issue | None:
        return self._issue_list.get_issue_by_id(issue_id)

    def execute_command(self, issue_id: int, command: Command) -> Issue:
        return self._issue_list.execute_command(issue_id, command)

    def delete_issue_by_id(self, issue_id: int) -> None:
        self._issue_list.delete_issue_by_id(issue_id)

    def add_issue_to_list(self, kind: IssueKind | str, summary: str, note: str) -> int:
        return self._issue_list.add_issue(kind, summary, note)
