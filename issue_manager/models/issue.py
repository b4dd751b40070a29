"""Issue record and its lifecycle state machine.

States: New -> (Assign) Working | (Confirm) Confirmed | (Resolve) Closed;
Working -> (Resolve Fixed) Verifying | (Resolve other) Closed;
Confirmed -> (Assign) Working | (Resolve WontFix) Closed;
Verifying -> (Reopen) Working | (Verify) Closed;
Closed -> (Reopen) Working, Confirmed or New depending on kind, confirmation and owner.

Each successful transition appends "[<prior state>] <note>" to the notes.
A rejected command raises UnsupportedTransition and leaves the issue untouched.
"""

import logging
from enum import Enum
from typing import Annotated, Any, Callable, Dict, List, NamedTuple, Sequence

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, ValidationError, model_validator

from issue_manager.errors import IssueConstructionError, UnsupportedTransition, summarize_validation_error
from issue_manager.models.command import Command, Resolution, Verb
from issue_manager.models.fields import NULL_OWNER, HeaderText, NoteText, OwnerText, empty_to_none

LOG = logging.getLogger("issue_manager.models.issue")


class IssueKind(str, Enum):
    """Issue classification, fixed at creation."""

    BUG = "Bug"
    ENHANCEMENT = "Enhancement"


class IssueState(str, Enum):
    """Workflow state of an issue."""

    NEW = "New"
    WORKING = "Working"
    CONFIRMED = "Confirmed"
    VERIFYING = "Verifying"
    CLOSED = "Closed"


class Issue(BaseModel):
    """Bug or enhancement tracked through the workflow."""

    issue_id: int = Field(..., ge=1, frozen=True, description="Unique positive id within a list")
    kind: IssueKind = Field(..., frozen=True, description="Bug or Enhancement")
    summary: HeaderText = Field(..., frozen=True, description="Summary given at creation")
    owner: Annotated[OwnerText | None, BeforeValidator(empty_to_none)] = Field(
        default=None,
        description="Owner id. None when unassigned.",
    )
    confirmed: StrictBool = Field(default=False, description="Bug confirmed; always False for enhancements")
    resolution: Annotated[Resolution | None, BeforeValidator(empty_to_none)] = Field(
        default=None,
        description="Resolution. None while unresolved.",
    )
    state: IssueState = Field(default=IssueState.NEW, description="Current workflow state")
    notes: List[NoteText] = Field(..., min_length=1, description="History, one annotated note per entry")

    model_config = ConfigDict(extra="forbid")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise IssueConstructionError(f"Issue cannot be created: {summarize_validation_error(e)}") from e

    @model_validator(mode="after")
    def _check_invariants(self) -> "Issue":
        violations = self.invariant_violations()
        if violations:
            raise ValueError("; ".join(violations))
        return self

    @classmethod
    def new(cls, issue_id: int, kind: IssueKind | str, summary: str, note: str) -> "Issue":
        """Create a fresh issue in state New with the first note annotated."""
        if not note or not note.strip():
            raise IssueConstructionError("Issue cannot be created: note is required")
        return cls(
            issue_id=issue_id,
            kind=kind,
            summary=summary,
            state=IssueState.NEW,
            notes=[_annotate(IssueState.NEW, note)],
        )

    @classmethod
    def from_fields(
        cls,
        issue_id: int,
        state: str,
        kind: str,
        summary: str,
        owner: str | None,
        confirmed: bool,
        resolution: str | None,
        notes: Sequence[str],
    ) -> "Issue":
        """Rebuild a persisted issue. Every field and invariant is checked again."""
        return cls(
            issue_id=issue_id,
            state=state,
            kind=kind,
            summary=summary,
            owner=owner,
            confirmed=confirmed,
            resolution=resolution,
            notes=list(notes),
        )

    def invariant_violations(self) -> List[str]:
        """Return a message per broken invariant (empty when valid)."""
        out = []
        state = self.state
        if self.kind is IssueKind.ENHANCEMENT:
            if self.confirmed:
                out.append("enhancement cannot be confirmed")
            if self.resolution is Resolution.WORKSFORME:
                out.append("enhancement cannot be resolved WorksForMe")
            if state is IssueState.CONFIRMED:
                out.append("enhancement cannot be in state Confirmed")
        elif state in (IssueState.WORKING, IssueState.VERIFYING) and not self.confirmed:
            out.append(f"bug in state {state.value} must be confirmed")
        if state in (IssueState.NEW, IssueState.CONFIRMED):
            if self.resolution is not None:
                out.append(f"state {state.value} cannot have a resolution")
            if self.owner is not None:
                out.append(f"state {state.value} cannot have an owner")
        if state in (IssueState.VERIFYING, IssueState.CLOSED) and self.resolution is None:
            out.append(f"state {state.value} requires a resolution")
        if state is IssueState.VERIFYING and self.resolution not in (None, Resolution.FIXED):
            out.append("state Verifying requires resolution Fixed")
        if state in (IssueState.WORKING, IssueState.VERIFYING) and self.owner is None:
            out.append(f"state {state.value} requires an owner")
        return out

    def is_valid(self) -> bool:
        """Check the cross-field invariants for the current state."""
        return not self.invariant_violations()

    def apply(self, command: Command) -> None:
        """Run the transition for command in the current state.

        Raises UnsupportedTransition without changing anything when the
        current state does not accept the command, or when the result would
        break an invariant (possible only for issues loaded from a file).
        """
        handler = _TRANSITIONS.get((self.state, command.verb))
        if handler is None:
            raise UnsupportedTransition(self.state, command.verb)
        transition = handler(self, command)

        candidate = self.model_copy(update={**transition.changes, "state": transition.state})
        violations = candidate.invariant_violations()
        if violations:
            raise UnsupportedTransition(self.state, command.verb, "; ".join(violations))

        prior = self.state
        for name, value in transition.changes.items():
            setattr(self, name, value)
        self.state = transition.state
        self.notes.append(_annotate(prior, command.note))
        LOG.debug(
            "Issue #%s %s: %s -> %s",
            self.issue_id,
            command.verb.value,
            prior.value,
            self.state.value,
        )

    def notes_string(self) -> str:
        """Notes as record lines, each prefixed with '-'."""
        return "".join(f"-{note}\n" for note in self.notes)

    def to_record(self) -> str:
        """Serialize as a record: '*' header line followed by note lines."""
        fields = [
            str(self.issue_id),
            self.state.value,
            self.kind.value,
            self.summary,
            self.owner if self.owner is not None else NULL_OWNER,
            "true" if self.confirmed else "false",
            self.resolution.value if self.resolution is not None else "",
        ]
        return "*" + ",".join(fields) + "\n" + self.notes_string()


def _annotate(state: IssueState, note: str) -> str:
    return f"[{state.value}] {note}"


class Transition(NamedTuple):
    """Outcome of a transition handler: next state and field updates."""

    state: IssueState
    changes: Dict[str, Any]


def _new_assign(issue: Issue, command: Command) -> Transition:
    if issue.kind is not IssueKind.ENHANCEMENT:
        raise UnsupportedTransition(issue.state, command.verb, "a bug must be confirmed before assignment")
    return Transition(IssueState.WORKING, {"owner": command.owner_id, "resolution": None})


def _new_confirm(issue: Issue, command: Command) -> Transition:
    if issue.kind is not IssueKind.BUG:
        raise UnsupportedTransition(issue.state, command.verb, "only bugs can be confirmed")
    return Transition(IssueState.CONFIRMED, {"confirmed": True})


def _new_resolve(issue: Issue, command: Command) -> Transition:
    if command.resolution is Resolution.FIXED:
        raise UnsupportedTransition(issue.state, command.verb, "an unassigned issue cannot be Fixed")
    if issue.kind is IssueKind.ENHANCEMENT and command.resolution is Resolution.WORKSFORME:
        raise UnsupportedTransition(issue.state, command.verb, "an enhancement cannot be WorksForMe")
    return Transition(IssueState.CLOSED, {"resolution": command.resolution})


def _working_resolve(issue: Issue, command: Command) -> Transition:
    if command.resolution is Resolution.FIXED:
        return Transition(IssueState.VERIFYING, {"resolution": Resolution.FIXED})
    if issue.kind is IssueKind.ENHANCEMENT and command.resolution is Resolution.WORKSFORME:
        raise UnsupportedTransition(issue.state, command.verb, "an enhancement cannot be WorksForMe")
    return Transition(IssueState.CLOSED, {"resolution": command.resolution})


def _confirmed_assign(issue: Issue, command: Command) -> Transition:
    return Transition(IssueState.WORKING, {"owner": command.owner_id, "resolution": None})


def _confirmed_resolve(issue: Issue, command: Command) -> Transition:
    if command.resolution is not Resolution.WONTFIX:
        raise UnsupportedTransition(issue.state, command.verb, "a confirmed bug can only be resolved WontFix")
    return Transition(IssueState.CLOSED, {"resolution": Resolution.WONTFIX})


def _verifying_reopen(issue: Issue, command: Command) -> Transition:
    return Transition(IssueState.WORKING, {"resolution": None})


def _verifying_verify(issue: Issue, command: Command) -> Transition:
    return Transition(IssueState.CLOSED, {})


def _closed_reopen(issue: Issue, command: Command) -> Transition:
    # Order matters: enhancement with owner is checked before the bug cases.
    is_bug = issue.kind is IssueKind.BUG
    if not is_bug and issue.owner:
        return Transition(IssueState.WORKING, {"resolution": None})
    if is_bug and issue.confirmed and issue.owner:
        return Transition(IssueState.WORKING, {"resolution": None})
    if is_bug and issue.confirmed:
        return Transition(IssueState.CONFIRMED, {"resolution": None})
    if not issue.owner:
        return Transition(IssueState.NEW, {"resolution": None})
    raise UnsupportedTransition(issue.state, command.verb, "an unconfirmed bug with an owner cannot be reopened")


_TRANSITIONS: Dict[tuple[IssueState, Verb], Callable[[Issue, Command], Transition]] = {
    (IssueState.NEW, Verb.ASSIGN): _new_assign,
    (IssueState.NEW, Verb.CONFIRM): _new_confirm,
    (IssueState.NEW, Verb.RESOLVE): _new_resolve,
    (IssueState.WORKING, Verb.RESOLVE): _working_resolve,
    (IssueState.CONFIRMED, Verb.ASSIGN): _confirmed_assign,
    (IssueState.CONFIRMED, Verb.RESOLVE): _confirmed_resolve,
    (IssueState.VERIFYING, Verb.REOPEN): _verifying_reopen,
    (IssueState.VERIFYING, Verb.VERIFY): _verifying_verify,
    (IssueState.CLOSED, Verb.REOPEN): _closed_reopen,
}
