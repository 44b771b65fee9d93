"""Task entity, row codec and in-memory collection."""

from tasktrack.tasks.codec import HEADER, decode_row, encode_row
from tasktrack.tasks.manager import TaskManager, TaskStats
from tasktrack.tasks.model import IdSequence, Task

__all__ = [
    "HEADER",
    "IdSequence",
    "Task",
    "TaskManager",
    "TaskStats",
    "decode_row",
    "encode_row",
]
