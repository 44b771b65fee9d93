"""Save file handling: bulk save/load through the row codec, delete, backup."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from tasktrack import log
from tasktrack.config import BACKUP_PREFIX, Config
from tasktrack.errors import (
    BACKUP_FAILED,
    DELETE_FAILED,
    LOAD_FAILED,
    SAVE_FAILED,
    StorageError,
    TaskFormatError,
)
from tasktrack.io_utils import copy_file, delete_file, ensure_dir, file_exists, read_text, write_text
from tasktrack.tasks.codec import HEADER, decode_row, encode_row, format_timestamp, is_header
from tasktrack.tasks.manager import TaskManager
from tasktrack.tasks.model import IdSequence, Task, utc_now


@dataclass
class LoadResult:
    tasks: list[Task] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    found: bool = True


def serialize_tasks(tasks: list[Task]) -> str:
    """Header line plus one row per task, newline-joined."""
    return "\n".join([HEADER, *(encode_row(t) for t in tasks)])


def parse_tasks(content: str, ids: IdSequence) -> LoadResult:
    """Decode every non-blank line of *content*, collecting per-line errors.

    A header on the first line is optional. Lines that fail to decode are
    reported as ``Line N: <reason>`` (N is the physical line number) and
    skipped; every other line still yields a Task.
    """
    result = LoadResult()
    lines = content.strip().split("\n")
    if not lines:
        return result

    start = 1 if is_header(lines[0]) else 0
    for lineno, raw in enumerate(lines[start:], start=start + 1):
        line = raw.strip()
        if not line:
            continue
        try:
            result.tasks.append(decode_row(line, ids))
        except TaskFormatError as exc:
            result.errors.append(f"Line {lineno}: {exc}")
    return result


def backup_name(now: datetime | None = None) -> str:
    stamp = format_timestamp(now or utc_now()).replace(":", "-").replace(".", "-")
    return f"{BACKUP_PREFIX}{stamp}.csv"


class TaskStore:
    """Reads and writes the tasks of a TaskManager to ``<data_dir>/<filename>``."""

    def __init__(self, cfg: Config | None = None) -> None:
        self.cfg = cfg or Config()

    @property
    def path(self) -> Path:
        return self.cfg.save_path

    def _ensure_data_dir(self) -> None:
        if ensure_dir(self.cfg.data_path):
            log.debug(f"Created data directory {self.cfg.data_path}")

    def exists(self) -> bool:
        return file_exists(self.path)

    def save_tasks(self, manager: TaskManager) -> Path:
        tasks = manager.get_all_tasks()
        try:
            self._ensure_data_dir()
            write_text(self.path, serialize_tasks(tasks))
        except OSError as exc:
            log.error(f"Error saving tasks: {exc}")
            raise StorageError(SAVE_FAILED, exc) from exc
        log.success(f"Saved {len(tasks)} tasks to {self.path}")
        return self.path

    def load_tasks(self, ids: IdSequence) -> LoadResult:
        """Load tasks from disk. A missing file is an empty, successful load."""
        try:
            self._ensure_data_dir()
            content = read_text(self.path)
        except FileNotFoundError:
            log.info("No save file found. Starting fresh!")
            return LoadResult(found=False)
        except (OSError, UnicodeDecodeError) as exc:
            log.error(f"Error loading tasks: {exc}")
            raise StorageError(LOAD_FAILED, exc) from exc

        result = parse_tasks(content, ids)
        if result.errors:
            log.warn_list("Some lines could not be loaded:", result.errors)
        log.info(f"Loaded {len(result.tasks)} tasks from {self.path}")
        return result

    def load_into(self, manager: TaskManager) -> LoadResult:
        """Load from disk and replace *manager*'s tasks with the result."""
        result = self.load_tasks(manager.ids)
        manager.set_tasks(result.tasks)
        return result

    def delete_save_file(self) -> bool:
        try:
            deleted = delete_file(self.path)
        except OSError as exc:
            raise StorageError(DELETE_FAILED, exc) from exc
        if deleted:
            log.success("Save file deleted!")
        else:
            log.debug(f"No save file at {self.path}; nothing to delete")
        return deleted

    def backup(self) -> Path | None:
        """Copy the save file next to itself under a timestamped name."""
        try:
            if not self.exists():
                log.info("No save file to backup")
                return None
            target = copy_file(self.path, self.cfg.data_path / backup_name())
        except OSError as exc:
            log.error(f"Error creating backup: {exc}")
            raise StorageError(BACKUP_FAILED, exc) from exc
        log.success(f"Backup created: {target}")
        return target
