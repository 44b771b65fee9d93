"""Console rendering of tasks and statistics."""

from __future__ import annotations

from datetime import datetime

from rich.markup import escape

from tasktrack import log
from tasktrack.tasks.manager import TaskStats
from tasktrack.tasks.model import Task

BAR_LENGTH = 20


def _local_date(dt: datetime) -> str:
    return dt.astimezone().strftime("%Y-%m-%d")


def task_lines(task: Task) -> list[str]:
    """Summary line plus indented detail lines for *task* (plain text)."""
    status = "✅" if task.completed else "⏳"
    summary = f"{status} [ID: {task.id}] {task.title}"
    if task.completed and task.completed_at:
        summary += f" (completed: {_local_date(task.completed_at)})"

    lines = [summary]
    if task.description:
        lines.append(f"    ┖─ Description: {task.description}")
    lines.append(f"    ┖─ Created: {_local_date(task.created_at)}")
    if task.updated_at and task.updated_at > task.created_at:
        lines.append(f"    ┖─ Updated: {_local_date(task.updated_at)}")
    return lines


def progress_bar(stats: TaskStats, length: int = BAR_LENGTH) -> str:
    if not stats.total:
        return "░" * length
    filled = min(round(stats.completed / stats.total * length), length)
    return "█" * filled + "░" * (length - filled)


def stats_lines(stats: TaskStats) -> list[str]:
    lines = [
        f"📊 Total tasks: {stats.total}",
        f"📈 Completed: {stats.completed}",
        f"📉 Pending: {stats.pending}",
    ]
    if stats.total:
        lines.append(f"🏆 Completion Rate: {stats.completion_rate:.1f}%")
        lines.append(f"    ┖─ Progress: [{progress_bar(stats)}]")
    return lines


def show_task(task: Task) -> None:
    summary, *details = task_lines(task)
    style = "green" if task.completed else "bold"
    log.console.print(f"[{style}]{escape(summary)}[/{style}]")
    for line in details:
        log.console.print(f"[dim]{escape(line)}[/dim]")


def show_tasks(tasks: list[Task], empty_message: str, label: str = "") -> None:
    if not tasks:
        log.console.print(empty_message)
        return
    for task in tasks:
        show_task(task)
    kind = f"{label} " if label else ""
    log.console.print(f"\nTotal: {len(tasks)} {kind}task(s)")


def show_stats(stats: TaskStats) -> None:
    for line in stats_lines(stats):
        log.console.print(escape(line))
