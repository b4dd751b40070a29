"""Tests for IssueList (ordering, id allocation, commands, deletion)."""

import pytest

from issue_manager.errors import IssueNotFoundError, UnsupportedTransition
from issue_manager.models import Command, Issue, IssueKind, IssueState, Verb
from issue_manager.services.store import IssueList


def _issue(issue_id: int, kind: str = "Bug") -> Issue:
    return Issue.new(issue_id, kind, f"Issue {issue_id}", "Created")


def test_add_issue_allocates_sequential_ids() -> None:
    """add_issue returns 1, 2, 3 ... and stores New issues."""
    issues = IssueList()
    assert issues.add_issue(IssueKind.BUG, "A", "a") == 1
    assert issues.add_issue("Enhancement", "B", "b") == 2
    assert len(issues) == 2
    assert issues.next_id == 3
    second = issues.get_issue_by_id(2)
    assert second is not None
    assert second.kind is IssueKind.ENHANCEMENT
    assert second.state is IssueState.NEW


def test_add_issue_invalid_does_not_consume_id() -> None:
    issues = IssueList()
    with pytest.raises(ValueError):
        issues.add_issue(IssueKind.BUG, "", "note")
    assert issues.next_id == 1
    assert len(issues) == 0


def test_add_issues_replaces_sorts_and_dedupes() -> None:
    """add_issues replaces contents, keeps first duplicate, sorts by id."""
    issues = IssueList()
    issues.add_issue(IssueKind.BUG, "old", "old")
    first_seven = _issue(7)
    issues.add_issues([_issue(14), first_seven, _issue(3), Issue.new(7, "Enhancement", "dup", "dup"), _issue(15)])
    assert [i.issue_id for i in issues.get_issues()] == [3, 7, 14, 15]
    assert issues.get_issue_by_id(7) is first_seven
    assert issues.next_id == 16


def test_add_issues_empty_resets_counter() -> None:
    issues = IssueList()
    issues.add_issue(IssueKind.BUG, "A", "a")
    issues.add_issues([])
    assert issues.get_issues() == []
    assert issues.next_id == 1


def test_get_issues_returns_copy() -> None:
    issues = IssueList()
    issues.add_issue(IssueKind.BUG, "A", "a")
    issues.get_issues().clear()
    assert len(issues) == 1


def test_get_issues_by_kind() -> None:
    issues = IssueList()
    issues.add_issues([_issue(1, "Enhancement"), _issue(3), _issue(7), _issue(14, "Enhancement")])
    bugs = issues.get_issues_by_kind("Bug")
    assert [i.issue_id for i in bugs] == [3, 7]
    assert [i.issue_id for i in issues.get_issues_by_kind(IssueKind.ENHANCEMENT)] == [1, 14]


def test_get_issues_by_unknown_kind() -> None:
    with pytest.raises(ValueError):
        IssueList().get_issues_by_kind("Task")


def test_get_issue_by_id_missing() -> None:
    assert IssueList().get_issue_by_id(42) is None


def test_execute_command_updates_issue() -> None:
    issues = IssueList()
    issues.add_issue(IssueKind.ENHANCEMENT, "A", "a")
    updated = issues.execute_command(1, Command(verb=Verb.ASSIGN, owner_id="owner", note="Assigned an owner"))
    assert updated.state is IssueState.WORKING
    assert updated.owner == "owner"
    assert updated.resolution is None
    assert issues.get_issue_by_id(1) is updated


def test_execute_command_unknown_id() -> None:
    issues = IssueList()
    with pytest.raises(IssueNotFoundError):
        issues.execute_command(5, Command(verb=Verb.VERIFY, note="x"))


def test_execute_command_unsupported_propagates() -> None:
    issues = IssueList()
    issues.add_issue(IssueKind.BUG, "A", "a")
    with pytest.raises(UnsupportedTransition):
        issues.execute_command(1, Command(verb=Verb.VERIFY, note="x"))
    issue = issues.get_issue_by_id(1)
    assert issue is not None
    assert issue.state is IssueState.NEW
    assert len(issue.notes) == 1


def test_delete_issue_by_id() -> None:
    """Deleting keeps the counter so ids are not reused."""
    issues = IssueList()
    for name in ("A", "B", "C"):
        issues.add_issue(IssueKind.BUG, name, "n")
    issues.delete_issue_by_id(3)
    assert [i.issue_id for i in issues.get_issues()] == [1, 2]
    assert issues.add_issue(IssueKind.BUG, "D", "n") == 4


def test_delete_issue_unknown_id() -> None:
    issues = IssueList()
    with pytest.raises(IssueNotFoundError) as exc:
        issues.delete_issue_by_id(9)
    assert str(exc.value) == "Issue #9 not found"
