"""Row codec: one Task <-> one ``;``-separated text row.

Row layout (fixed, 7 fields)::

    id;title;description;completed;createdAt;updatedAt;completedAt
    1;"Buy milk";"2% milk";false;2024-01-01T00:00:00.000Z;2024-01-01T00:00:00.000Z;

Title and description are always written quoted, with embedded quotes doubled.
Reading is lenient: unquoted fields are accepted verbatim and stray quotes
inside a quoted field are kept as literal characters.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from tasktrack.errors import TaskFormatError
from tasktrack.tasks.model import IdSequence, Task, single_line

SEPARATOR = ";"
QUOTE = '"'
FIELDS: tuple[str, ...] = (
    "id",
    "title",
    "description",
    "completed",
    "createdAt",
    "updatedAt",
    "completedAt",
)
FIELD_COUNT = len(FIELDS)
HEADER = SEPARATOR.join(FIELDS)
HEADER_SIGNATURE = "id;title;description"
UNTITLED = "Untitled"


class ParseState(str, Enum):
    UNQUOTED = "unquoted"
    QUOTED = "quoted"
    PENDING_ESCAPE = "pending_escape"  # saw a quote inside a quoted span


def is_header(line: str) -> bool:
    return HEADER_SIGNATURE in line


# ── timestamps ───────────────────────────────────────────────────────

def format_timestamp(dt: datetime) -> str:
    """Render *dt* as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC.

    Raises TaskFormatError when the text is not a valid timestamp.
    """
    raw = text.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(raw)
    except ValueError:
        raise TaskFormatError(f"Invalid timestamp: {text!r}") from None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


# ── encode ───────────────────────────────────────────────────────────

def quote(value: str) -> str:
    """Wrap *value* in quotes, doubling embedded quotes.

    Line breaks become spaces, as on Task itself.
    """
    value = single_line(value)
    return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE


def encode_row(task: Task) -> str:
    fields = [
        str(task.id),
        quote(task.title),
        quote(task.description),
        "true" if task.completed else "false",
        format_timestamp(task.created_at),
        format_timestamp(task.updated_at or task.created_at),
        format_timestamp(task.completed_at) if task.completed_at else "",
    ]
    return SEPARATOR.join(fields)


# ── decode ───────────────────────────────────────────────────────────

def split_row(row: str) -> list[str]:
    """Split *row* into unquoted field values.

    Always returns at least one field. An unterminated quoted field runs to
    the end of the row.
    """
    fields: list[str] = []
    buf: list[str] = []
    state = ParseState.UNQUOTED

    for char in row:
        if state is ParseState.UNQUOTED:
            if char == SEPARATOR:
                fields.append("".join(buf))
                buf = []
            elif char == QUOTE and not buf:
                state = ParseState.QUOTED
            else:
                buf.append(char)
        elif state is ParseState.QUOTED:
            if char == QUOTE:
                state = ParseState.PENDING_ESCAPE
            else:
                buf.append(char)
        else:
            if char == QUOTE:
                buf.append(QUOTE)
                state = ParseState.QUOTED
            elif char == SEPARATOR:
                fields.append("".join(buf))
                buf = []
                state = ParseState.UNQUOTED
            else:
                # stray quote inside the span: keep it
                buf.append(QUOTE)
                buf.append(char)
                state = ParseState.QUOTED

    fields.append("".join(buf))
    return fields


def _parse_id(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise TaskFormatError(f"Invalid task id: {text!r}") from None


def decode_row(row: str, ids: IdSequence) -> Task:
    """Decode one row into a Task, keeping *ids* ahead of the restored id.

    Raises TaskFormatError when the row does not have exactly seven fields
    or an id/timestamp field cannot be parsed.
    """
    parts = split_row(row)
    if len(parts) != FIELD_COUNT:
        raise TaskFormatError.field_count(FIELD_COUNT, len(parts))

    raw_id, title, description, completed, created_at, updated_at, completed_at = parts
    task_id = _parse_id(raw_id)
    created = parse_timestamp(created_at)
    updated = parse_timestamp(updated_at)
    finished = parse_timestamp(completed_at) if completed_at.strip() else None

    task = Task.create(title or UNTITLED, description, ids=ids)
    task.id = task_id
    task.completed = completed == "true"
    task.created_at = created
    task.updated_at = updated
    if task.completed:
        task.completed_at = finished or updated
    else:
        task.completed_at = None

    ids.advance_past(task_id)
    return task
