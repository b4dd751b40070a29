"""Issue and command models."""

from issue_manager.models.command import Command, Resolution, Verb
from issue_manager.models.issue import Issue, IssueKind, IssueState, Transition

__all__ = [
    "Command",
    "Issue",
    "IssueKind",
    "IssueState",
    "Resolution",
    "Transition",
    "Verb",
]
