"""tasktrack CLI: interactive menu plus one-shot commands.

Installed as ``tasktrack`` console_script via pipx / pip. Running it with no
subcommand opens the numbered menu.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import click

from tasktrack import __version__, log
from tasktrack.config import Config
from tasktrack.display import show_stats, show_task, show_tasks
from tasktrack.errors import StorageError
from tasktrack.store import LoadResult, TaskStore
from tasktrack.tasks.manager import TaskManager


CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@dataclass
class Session:
    """Config, store and the in-memory collection for one invocation."""

    cfg: Config
    store: TaskStore
    manager: TaskManager

    @classmethod
    def from_config(cls, cfg: Config) -> Session:
        return cls(cfg=cfg, store=TaskStore(cfg), manager=TaskManager())

    def load(self) -> LoadResult:
        return self.store.load_into(self.manager)

    def save(self) -> None:
        self.store.save_tasks(self.manager)


def parse_task_id(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _ask(text: str) -> str:
    return click.prompt(text, default="", show_default=False, prompt_suffix=" ")


# ── Interactive menu ─────────────────────────────────────────────────

MENU_TEXT = """=== MAIN MENU ===
    1. Add task
    2. View all tasks
    3. View completed tasks
    4. View pending tasks
    5. Update task
    6. Toggle task completion
    7. Remove task
    8. View statistics
    9. Clear all tasks
    0. Exit
================="""


class Menu:
    """Numbered menu loop. Saves after every action that changed the tasks."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.running = False
        self._actions: dict[str, Callable[[], bool]] = {
            "1": self.add_task,
            "2": self.view_all,
            "3": self.view_completed,
            "4": self.view_pending,
            "5": self.update_task,
            "6": self.toggle_task,
            "7": self.remove_task,
            "8": self.view_stats,
            "9": self.clear_all,
            "0": self.exit,
        }

    @property
    def manager(self) -> TaskManager:
        return self.session.manager

    def run(self) -> None:
        log.console.print("\n📖 Welcome to Task Manager\n")
        try:
            self.session.load()
        except StorageError as exc:
            # saving an empty list now would overwrite the unreadable file
            raise click.ClickException(str(exc)) from exc

        self.running = True
        while self.running:
            try:
                self.step()
            except click.Abort:
                self.running = False
        log.console.print("\n🙋 Bye!\n")

    def step(self) -> None:
        log.console.print(MENU_TEXT)
        choice = _ask("Choose an option (0-9):").strip()
        log.console.print("")

        action = self._actions.get(choice)
        if action is None:
            log.warn("Invalid choice. Please try again.")
            return

        if not action():
            return
        try:
            self.session.save()
        except StorageError as exc:
            log.error(str(exc))

    def _pick_task_id(self, verb: str) -> int | None:
        tasks = self.manager.get_all_tasks()
        if not tasks:
            log.console.print(f"No tasks available to {verb}.")
            return None
        for task in tasks:
            show_task(task)
        task_id = parse_task_id(_ask(f"Enter task ID to {verb}:"))
        if task_id is None:
            log.error("Invalid task ID")
        return task_id

    # ── actions (return True when tasks changed) ─────────────────

    def add_task(self) -> bool:
        log.console.print("--- Add new task ---")
        title = _ask("Enter a title:")
        if not title.strip():
            log.error("Title cannot be empty")
            return False
        description = _ask("Enter a description (optional):")
        task = self.manager.add_task(title, description)
        log.success("Task added!")
        show_task(task)
        return True

    def view_all(self) -> bool:
        log.console.print("--- All tasks ---")
        show_tasks(self.manager.get_all_tasks(), "📝 Task list is empty!")
        return False

    def view_completed(self) -> bool:
        log.console.print("--- Completed tasks ---")
        show_tasks(self.manager.get_completed_tasks(), "No completed tasks found.", "completed")
        return False

    def view_pending(self) -> bool:
        log.console.print("--- Pending tasks ---")
        show_tasks(self.manager.get_pending_tasks(), "No pending tasks found.", "pending")
        return False

    def update_task(self) -> bool:
        log.console.print("--- Update task ---")
        task_id = self._pick_task_id("update")
        if task_id is None:
            return False
        task = self.manager.find_task(task_id)
        if task is None:
            log.error("Task not found")
            return False

        log.console.print("Leave blank to keep the current title/description.", markup=False)
        log.console.print(f"Current: {task.title} - {task.description or 'none'}", markup=False)
        title = _ask("New title:")
        description = _ask("New description:")
        if not title.strip() and not description.strip():
            log.info("No changes made.")
            return False

        self.manager.update_task(task_id, title=title, description=description or None)
        log.success("Task updated!")
        show_task(task)
        return True

    def toggle_task(self) -> bool:
        log.console.print("--- Toggle task completion ---")
        task_id = self._pick_task_id("toggle completion")
        if task_id is None:
            return False
        if not self.manager.toggle_task_completion(task_id):
            log.error("Task not found")
            return False
        task = self.manager.find_task(task_id)
        log.success(f"Task marked as {'done' if task.completed else 'pending'}!")
        show_task(task)
        return True

    def remove_task(self) -> bool:
        log.console.print("--- Remove task ---")
        task_id = self._pick_task_id("remove")
        if task_id is None:
            return False
        task = self.manager.find_task(task_id)
        if task is None:
            log.error("Task not found")
            return False

        log.console.print("Task to be removed:")
        show_task(task)
        if not click.confirm("Are you sure?", default=False):
            log.info("Removal cancelled.")
            return False
        self.manager.remove_task(task_id)
        log.success("Task removed!")
        return True

    def view_stats(self) -> bool:
        log.console.print("--- Task statistics ---")
        show_stats(self.manager.get_stats())
        return False

    def clear_all(self) -> bool:
        log.console.print("--- Clear all tasks ---")
        total = self.manager.get_stats().total
        if not total:
            log.console.print("No tasks to clear.")
            return False
        log.warn(f"This will remove ALL ({total}) tasks!")
        if _ask('Type "yes" to confirm:').strip().lower() != "yes":
            log.info("Clear all tasks cancelled.")
            return False
        self.manager.clear_all_tasks()
        log.success("All tasks cleared!")
        return True

    def exit(self) -> bool:
        self.running = False
        return False


# ── CLI entry ────────────────────────────────────────────────────────

@click.group(
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.option("--data-dir", default="", help="Directory holding the save file (default: ./data)")
@click.option("--file", "filename", default="", help="Save file name (default: tasks.csv)")
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.version_option(__version__, prog_name="tasktrack")
@click.pass_context
def main(ctx: click.Context, data_dir: str, filename: str, verbose: bool) -> None:
    """TASKTRACK: manage a personal to-do list from the terminal.

    Run without a command for the interactive menu.
    """
    cfg = Config(data_dir=data_dir, filename=filename, verbose=verbose)
    log.set_verbose(cfg.verbose)
    log.debug(f"Save file: {cfg.save_path}")
    ctx.obj = Session.from_config(cfg)

    if ctx.invoked_subcommand is None:
        Menu(ctx.obj).run()


def _open(ctx: click.Context) -> Session:
    session: Session = ctx.obj
    try:
        session.load()
    except StorageError as exc:
        raise click.ClickException(str(exc)) from exc
    return session


def _commit(session: Session) -> None:
    try:
        session.save()
    except StorageError as exc:
        raise click.ClickException(str(exc)) from exc


def _not_found(task_id: int) -> click.ClickException:
    return click.ClickException(f"Task {task_id} not found")


@main.command()
@click.argument("title")
@click.option("--description", "-d", default="", help="Optional description")
@click.pass_context
def add(ctx: click.Context, title: str, description: str) -> None:
    """Add a task."""
    if not title.strip():
        raise click.BadParameter("Title cannot be empty.", param_hint="TITLE")
    session = _open(ctx)
    task = session.manager.add_task(title, description)
    _commit(session)
    show_task(task)


@main.command(name="list")
@click.option("--completed", is_flag=True, help="Only completed tasks")
@click.option("--pending", is_flag=True, help="Only pending tasks")
@click.pass_context
def list_tasks(ctx: click.Context, completed: bool, pending: bool) -> None:
    """List tasks."""
    if completed and pending:
        raise click.UsageError("Choose at most one of --completed/--pending.")
    manager = _open(ctx).manager
    if completed:
        show_tasks(manager.get_completed_tasks(), "No completed tasks found.", "completed")
    elif pending:
        show_tasks(manager.get_pending_tasks(), "No pending tasks found.", "pending")
    else:
        show_tasks(manager.get_all_tasks(), "📝 Task list is empty!")


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def toggle(ctx: click.Context, task_id: int) -> None:
    """Toggle completion of a task."""
    session = _open(ctx)
    if not session.manager.toggle_task_completion(task_id):
        raise _not_found(task_id)
    _commit(session)
    show_task(session.manager.find_task(task_id))


@main.command()
@click.argument("task_id", type=int)
@click.option("--title", default=None, help="New title (blank keeps the current one)")
@click.option("--description", "-d", default=None, help="New description")
@click.pass_context
def update(ctx: click.Context, task_id: int, title: str | None, description: str | None) -> None:
    """Edit a task's title and/or description."""
    if title is None and description is None:
        raise click.UsageError("Nothing to update: pass --title and/or --description.")
    session = _open(ctx)
    if not session.manager.update_task(task_id, title=title, description=description):
        raise _not_found(task_id)
    _commit(session)
    show_task(session.manager.find_task(task_id))


@main.command()
@click.argument("task_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def remove(ctx: click.Context, task_id: int, yes: bool) -> None:
    """Remove a task."""
    session = _open(ctx)
    task = session.manager.find_task(task_id)
    if task is None:
        raise _not_found(task_id)
    if not yes:
        show_task(task)
        click.confirm("Remove this task?", abort=True)
    session.manager.remove_task(task_id)
    _commit(session)
    log.success(f"Task {task_id} removed.")


@main.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show task statistics."""
    show_stats(_open(ctx).manager.get_stats())


@main.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear(ctx: click.Context, yes: bool) -> None:
    """Remove every task."""
    session = _open(ctx)
    total = len(session.manager)
    if not total:
        log.info("No tasks to clear.")
        return
    if not yes:
        click.confirm(f"Remove ALL ({total}) tasks?", abort=True)
    session.manager.clear_all_tasks()
    _commit(session)
    log.success("All tasks cleared!")


@main.command()
@click.pass_context
def backup(ctx: click.Context) -> None:
    """Copy the save file to a timestamped backup."""
    session: Session = ctx.obj
    try:
        session.store.backup()
    except StorageError as exc:
        raise click.ClickException(str(exc)) from exc


@main.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset(ctx: click.Context, yes: bool) -> None:
    """Delete the save file."""
    session: Session = ctx.obj
    if not session.store.exists():
        log.info("No save file to delete.")
        return
    if not yes:
        click.confirm(f"Delete {session.store.path}?", abort=True)
    try:
        session.store.delete_save_file()
    except StorageError as exc:
        raise click.ClickException(str(exc)) from exc


if __name__ == "__main__":
    main()
