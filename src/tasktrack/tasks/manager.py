"""In-memory task collection for one session."""

from __future__ import annotations

from dataclasses import dataclass

from tasktrack.tasks.model import IdSequence, Task


@dataclass(frozen=True)
class TaskStats:
    total: int = 0
    completed: int = 0
    pending: int = 0

    @property
    def completion_rate(self) -> float:
        if not self.total:
            return 0.0
        return self.completed / self.total * 100


class TaskManager:
    """Ordered collection of tasks keyed by id.

    By-id operations report "not found" through their return value
    (``False`` / ``None``); they never raise for a missing id.
    Every list returned is a fresh copy of the internal sequence.
    """

    def __init__(self, ids: IdSequence | None = None) -> None:
        self.ids = ids if ids is not None else IdSequence()
        self._tasks: list[Task] = []

    # ── mutation ─────────────────────────────────────────────────

    def add_task(self, title: str, description: str = "") -> Task:
        task = Task.create(title, description, ids=self.ids)
        self._tasks.append(task)
        return task

    def remove_task(self, task_id: int) -> bool:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[index]
                return True
        return False

    def update_task(self, task_id: int, title: str | None = None, description: str | None = None) -> bool:
        task = self.find_task(task_id)
        if task is None:
            return False
        task.update(title=title, description=description)
        return True

    def mark_completed(self, task_id: int) -> bool:
        task = self.find_task(task_id)
        if task is None:
            return False
        task.mark_completed()
        return True

    def mark_incomplete(self, task_id: int) -> bool:
        task = self.find_task(task_id)
        if task is None:
            return False
        task.mark_incomplete()
        return True

    def toggle_task_completion(self, task_id: int) -> bool:
        task = self.find_task(task_id)
        if task is None:
            return False
        task.toggle()
        return True

    def clear_all_tasks(self) -> None:
        self._tasks = []

    def set_tasks(self, tasks: list[Task]) -> None:
        """Replace the collection, e.g. with tasks restored from disk."""
        self._tasks = list(tasks)
        for task in self._tasks:
            self.ids.advance_past(task.id)

    # ── queries ──────────────────────────────────────────────────

    def find_task(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def get_all_tasks(self) -> list[Task]:
        return list(self._tasks)

    def get_completed_tasks(self) -> list[Task]:
        return [t for t in self._tasks if t.completed]

    def get_pending_tasks(self) -> list[Task]:
        return [t for t in self._tasks if not t.completed]

    def get_stats(self) -> TaskStats:
        completed = len(self.get_completed_tasks())
        return TaskStats(
            total=len(self._tasks),
            completed=completed,
            pending=len(self._tasks) - completed,
        )

    def get_task_count(self) -> str:
        return f"Total: {len(self._tasks)} tasks"

    def __len__(self) -> int:
        return len(self._tasks)
