"""In-memory issue storage (IssueList) and its file-backed facade (IssueManager)."""

from issue_manager.services.store.issue_list import IssueList
from issue_manager.services.store.issue_manager import IssueManager, IssueRow

__all__ = ["IssueList", "IssueManager", "IssueRow"]
