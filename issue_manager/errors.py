"""Exceptions raised by the issue models, the store and record I/O."""

from pydantic import ValidationError


class IssueManagerError(Exception):
    """Base class for all issue manager errors."""

    pass


class IssueConstructionError(IssueManagerError, ValueError):
    """Raised when an Issue cannot be built from the given fields."""

    pass


class InvalidCommand(IssueConstructionError):
    """Raised when a Command is missing a required field."""

    pass


class UnsupportedTransition(IssueManagerError):
    """Raised when the current issue state does not accept a command.

    The issue is left unchanged.
    """

    def __init__(self, state: object, verb: object, reason: str | None = None) -> None:
        self.state = state
        self.verb = verb
        self.reason = reason
        message = f"{_label(verb)} is not supported in state {_label(state)}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class IssueNotFoundError(IssueManagerError, KeyError):
    """Raised when no issue with the given id exists in the list."""

    def __init__(self, issue_id: int) -> None:
        self.issue_id = issue_id
        super().__init__(issue_id)

    def __str__(self) -> str:
        return f"Issue #{self.issue_id} not found"


class IssueFileError(IssueManagerError):
    """Raised when an issues file cannot be read, parsed or written."""

    pass


def _label(value: object) -> str:
    return str(getattr(value, "value", value))


def summarize_validation_error(error: ValidationError) -> str:
    """Join pydantic error messages into one line."""
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)
