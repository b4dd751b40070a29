"""Tests for the IssueManager facade."""

from pathlib import Path

import pytest

from issue_manager.errors import IssueFileError, IssueNotFoundError
from issue_manager.models import Command, IssueKind, IssueState, Resolution, Verb
from issue_manager.services.store import IssueManager, IssueRow

SAMPLE = (
    "*1,New,Enhancement,Add dark mode,null,false,\n"
    "-[New] Please\n"
    "*3,Confirmed,Bug,Crash on save,null,true,\n"
    "-[New] Crashes\n"
    "-[Confirmed] Reproduced\n"
    "*7,Working,Bug,Slow start,owner,true,\n"
    "-[New] Slow\n"
    "-[Confirmed] Yes\n"
    "-[Working] On it\n"
)


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "issues.txt"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


def test_managers_are_independent() -> None:
    """Each IssueManager owns its own list."""
    a = IssueManager()
    b = IssueManager()
    a.add_issue_to_list(IssueKind.BUG, "S", "N")
    assert len(a.issue_list) == 1
    assert len(b.issue_list) == 0


def test_load_issues_from_file(sample_file: Path) -> None:
    manager = IssueManager()
    manager.add_issue_to_list(IssueKind.BUG, "to be replaced", "n")
    manager.load_issues_from_file(sample_file)
    assert [r.issue_id for r in manager.get_issue_list_as_rows()] == [1, 3, 7]
    assert manager.add_issue_to_list(IssueKind.BUG, "next", "n") == 8


def test_failed_load_keeps_current_list(tmp_path: Path) -> None:
    """A bad file leaves the loaded issues untouched."""
    bad = tmp_path / "bad.txt"
    bad.write_text(SAMPLE + "*9,Closed,Bug,S,null,false,\n-[New] a\n", encoding="utf-8")
    manager = IssueManager()
    manager.add_issue_to_list(IssueKind.BUG, "keep me", "n")
    with pytest.raises(IssueFileError):
        manager.load_issues_from_file(bad)
    assert [r.summary for r in manager.get_issue_list_as_rows()] == ["keep me"]


def test_save_and_reload(tmp_path: Path, sample_file: Path) -> None:
    manager = IssueManager()
    manager.load_issues_from_file(sample_file)
    manager.execute_command(3, Command(verb=Verb.ASSIGN, owner_id="kim", note="Taking it"))
    out = manager.save_issues_to_file(tmp_path / "saved.txt")

    other = IssueManager()
    other.load_issues_from_file(out)
    issue = other.get_issue_by_id(3)
    assert issue is not None
    assert issue.state is IssueState.WORKING
    assert issue.owner == "kim"
    assert issue.notes[-1] == "[Confirmed] Taking it"
    assert other.issue_list.get_issues() == manager.issue_list.get_issues()


def test_rows(sample_file: Path) -> None:
    manager = IssueManager()
    manager.load_issues_from_file(sample_file)
    rows = manager.get_issue_list_as_rows()
    assert rows[0] == IssueRow(issue_id=1, state="New", kind="Enhancement", summary="Add dark mode")
    bug_rows = manager.get_issue_list_as_rows("Bug")
    assert [(r.issue_id, r.state) for r in bug_rows] == [(3, "Confirmed"), (7, "Working")]
    assert manager.get_issue_list_as_rows(IssueKind.ENHANCEMENT)[0].issue_id == 1


def test_create_new_issue_list(sample_file: Path) -> None:
    manager = IssueManager()
    manager.load_issues_from_file(sample_file)
    manager.create_new_issue_list()
    assert manager.get_issue_list_as_rows() == []
    assert manager.add_issue_to_list(IssueKind.BUG, "S", "N") == 1


def test_execute_and_delete(sample_file: Path) -> None:
    manager = IssueManager()
    manager.load_issues_from_file(sample_file)
    issue = manager.execute_command(7, Command(verb=Verb.RESOLVE, resolution=Resolution.FIXED, note="Done"))
    assert issue.state is IssueState.VERIFYING
    manager.delete_issue_by_id(1)
    assert manager.get_issue_by_id(1) is None
    with pytest.raises(IssueNotFoundError):
        manager.delete_issue_by_id(1)
