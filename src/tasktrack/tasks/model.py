"""Task entity and the id sequence that numbers tasks within a session."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def single_line(text: str) -> str:
    """Fold line breaks into spaces; a task is stored on one line."""
    return text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def utc_now() -> datetime:
    """Current UTC time truncated to whole milliseconds.

    Stored timestamps carry millisecond precision, so in-memory values are
    truncated the same way to keep encode/decode lossless.
    """
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


class IdSequence:
    """Monotonic id allocator owned by whoever constructs tasks.

    Usage::

        ids = IdSequence()
        ids.next()            # 1
        ids.advance_past(9)   # restored task with id 9 -> next is 10
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value

    def peek(self) -> int:
        return self._next

    def advance_past(self, task_id: int) -> None:
        if task_id >= self._next:
            self._next = task_id + 1

    def reset(self, start: int = 1) -> None:
        self._next = start


@dataclass
class Task:
    id: int
    title: str
    description: str = ""
    completed: bool = False
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime | None = None
    completed_at: datetime | None = None

    def __post_init__(self) -> None:
        self.title = single_line(self.title)
        self.description = single_line(self.description)
        if self.updated_at is None:
            self.updated_at = self.created_at

    @classmethod
    def create(cls, title: str, description: str = "", *, ids: IdSequence) -> Task:
        """Build a fresh, incomplete task numbered from *ids*.

        The title is not validated here; rejecting blank titles is up to the caller.
        """
        return cls(id=ids.next(), title=title, description=description or "")

    # ── state transitions ────────────────────────────────────────

    def mark_completed(self) -> None:
        now = utc_now()
        self.completed = True
        self.completed_at = now
        self.updated_at = now

    def mark_incomplete(self) -> None:
        self.completed = False
        self.completed_at = None
        self.updated_at = utc_now()

    def toggle(self) -> None:
        if self.completed:
            self.mark_incomplete()
        else:
            self.mark_completed()

    def update(self, title: str | None = None, description: str | None = None) -> None:
        """Apply a partial edit. Blank titles are ignored; updated_at always moves."""
        if title is not None and title.strip():
            self.title = single_line(title)
        if description is not None:
            self.description = single_line(description)
        self.updated_at = utc_now()

    # ── presentation ─────────────────────────────────────────────

    def format(self) -> str:
        status = "✅" if self.completed else "❌"
        line = f"[{self.id}] {status} {self.title}"
        if self.description:
            line += f" - {self.description}"
        return line

    def __str__(self) -> str:
        return self.format()
