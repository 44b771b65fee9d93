"""Error types for row decoding and save-file storage."""

from __future__ import annotations


class TaskFormatError(ValueError):
    """A row could not be decoded into a Task.

    Fatal to that row only; the bulk loader collects these and keeps going.
    """

    def __init__(self, message: str, *, expected: int | None = None, actual: int | None = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual

    @classmethod
    def field_count(cls, expected: int, actual: int) -> TaskFormatError:
        return cls(
            f"Invalid row format: expected {expected} fields, got {actual}",
            expected=expected,
            actual=actual,
        )


class StorageError(RuntimeError):
    """Reading, writing, deleting or copying the save file failed.

    Messages start with a stable prefix naming the operation, e.g.
    ``Failed to save tasks: ...``. A missing file is never a StorageError.
    """

    def __init__(self, operation: str, cause: BaseException | str) -> None:
        detail = str(cause) or type(cause).__name__
        super().__init__(f"{operation}: {detail}")
        self.operation = operation


SAVE_FAILED = "Failed to save tasks"
LOAD_FAILED = "Failed to load tasks"
DELETE_FAILED = "Failed to delete save file"
BACKUP_FAILED = "Failed to create backup"
