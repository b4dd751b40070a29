"""Commands applied to issues (verb, owner, resolution, note)."""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, model_validator

from issue_manager.errors import InvalidCommand, summarize_validation_error
from issue_manager.models.fields import NoteText, OwnerText, empty_to_none


class Verb(str, Enum):
    """Action requested by a command."""

    ASSIGN = "Assign"
    CONFIRM = "Confirm"
    RESOLVE = "Resolve"
    VERIFY = "Verify"
    REOPEN = "Reopen"


class Resolution(str, Enum):
    """Terminal disposition of an issue."""

    FIXED = "Fixed"
    DUPLICATE = "Duplicate"
    WONTFIX = "WontFix"
    WORKSFORME = "WorksForMe"


class Command(BaseModel):
    """Immutable instruction consumed by Issue.apply.

    Assign needs a non-empty owner_id, Resolve needs a resolution, and every
    command needs a non-empty note. Fields not used by the verb are carried
    and ignored. Owner and note are limited to text the record file can hold
    (see issue_manager.models.fields); trailing whitespace of the note is dropped.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    verb: Verb = Field(..., description="Assign, Confirm, Resolve, Verify or Reopen")
    owner_id: Annotated[OwnerText | None, BeforeValidator(empty_to_none)] = Field(
        default=None,
        description="New owner; required for Assign",
    )
    resolution: Resolution | None = Field(default=None, description="Required for Resolve")
    note: NoteText = Field(..., description="Annotation appended to the issue history")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidCommand(f"Invalid command: {summarize_validation_error(e)}") from e

    @model_validator(mode="after")
    def _check_verb_fields(self) -> "Command":
        if self.verb is Verb.ASSIGN and not self.owner_id:
            raise ValueError("Assign requires an owner")
        if self.verb is Verb.RESOLVE and self.resolution is None:
            raise ValueError("Resolve requires a resolution")
        return self

