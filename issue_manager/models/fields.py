"""Text field types that survive the record file format unchanged.

Header fields (summary, owner) are comma-separated on one line, so they may
not contain a comma or a line break. Notes may span lines, but a continuation
line starting with '-' or '*' would be read back as a new note or record, and
trailing whitespace is dropped on read, so it is dropped here too.
"""

from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, Field

NULL_OWNER = "null"
MARKERS = ("-", "*")


def _check_header_field(value: str) -> str:
    if "," in value:
        raise ValueError("must not contain a comma")
    if value.splitlines() != [value]:
        raise ValueError("must be a single line")
    return value


def _check_owner(value: str) -> str:
    if value == NULL_OWNER:
        raise ValueError(f"{NULL_OWNER!r} is reserved for no owner")
    return value


def empty_to_none(value: Any) -> Any:
    """Treat empty text as an absent value (owner, resolution)."""
    if value is None or value == "":
        return None
    return value


def _rstrip(value: Any) -> Any:
    if isinstance(value, str):
        return value.rstrip()
    return value


def _check_note(value: str) -> str:
    lines = value.split("\n")
    if value.splitlines() != lines:
        raise ValueError("lines must be separated by '\\n' only")
    for line in lines[1:]:
        if line.startswith(MARKERS):
            raise ValueError(f"continuation line must not start with {' or '.join(MARKERS)}: {line!r}")
    return value


HeaderText = Annotated[str, Field(min_length=1), AfterValidator(_check_header_field)]
OwnerText = Annotated[HeaderText, AfterValidator(_check_owner)]
NoteText = Annotated[str, BeforeValidator(_rstrip), Field(min_length=1), AfterValidator(_check_note)]
