"""Ordered issue collection with sequential id allocation."""

import logging
from typing import Iterable, List

from issue_manager.errors import IssueNotFoundError, UnsupportedTransition
from issue_manager.models import Command, Issue, IssueKind

LOG = logging.getLogger("issue_manager.services.store.issue_list")


class IssueList:
    """Issues kept in ascending id order.

    New issues get the next counter value. The counter never goes back, so
    ids of deleted issues are not reused until the list is reloaded.
    """

    def __init__(self) -> None:
        self._issues: List[Issue] = []
        self._counter = 1

    @property
    def next_id(self) -> int:
        """Id the next added issue will get."""
        return self._counter

    def add_issue(self, kind: IssueKind | str, summary: str, note: str) -> int:
        """Create a New issue with the next id. Returns the id."""
        issue = Issue.new(self._counter, kind, summary, note)
        self._issues.append(issue)
        self._counter += 1
        LOG.info("Added issue #%s (%s)", issue.issue_id, issue.kind.value)
        return issue.issue_id

    def add_issues(self, issues: Iterable[Issue]) -> None:
        """Replace the contents with issues.

        Duplicate ids keep the first occurrence. Issues are sorted by id and
        the counter continues after the largest id.
        """
        by_id: dict[int, Issue] = {}
        for issue in issues:
            if issue.issue_id in by_id:
                LOG.warning("Skipping duplicate issue #%s", issue.issue_id)
                continue
            by_id[issue.issue_id] = issue
        self._issues = [by_id[i] for i in sorted(by_id)]
        self._counter = self._issues[-1].issue_id + 1 if self._issues else 1

    def get_issues(self) -> List[Issue]:
        return list(self._issues)

    def get_issues_by_kind(self, kind: IssueKind | str) -> List[Issue]:
        """Issues of the given kind. Raises ValueError for an unknown kind name."""
        kind = IssueKind(kind)
        return [issue for issue in self._issues if issue.kind is kind]

    def get_issue_by_id(self, issue_id: int) -> Issue | None:
        for issue in self._issues:
            if issue.issue_id == issue_id:
                return issue
        return None

    def execute_command(self, issue_id: int, command: Command) -> Issue:
        """Apply command to the issue with issue_id. Returns the updated issue."""
        issue = self.get_issue_by_id(issue_id)
        if issue is None:
            raise IssueNotFoundError(issue_id)
        try:
            issue.apply(command)
        except UnsupportedTransition as e:
            LOG.warning("Issue #%s rejected command: %s", issue_id, e)
            raise
        LOG.info("Issue #%s %s -> %s", issue_id, command.verb.value, issue.state.value)
        return issue

    def delete_issue_by_id(self, issue_id: int) -> None:
        for index, issue in enumerate(self._issues):
            if issue.issue_id == issue_id:
                del self._issues[index]
                LOG.info("Deleted issue #%s", issue_id)
                return
        raise IssueNotFoundError(issue_id)

    def __len__(self) -> int:
        return len(self._issues)
