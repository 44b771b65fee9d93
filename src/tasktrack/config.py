"""Configuration defaults, env vars, and runtime options for tasktrack."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


VERSION = "1.0.0"

DEFAULT_DATA_DIR = "data"
DEFAULT_FILENAME = "tasks.csv"
BACKUP_PREFIX = "tasks-backup-"


@dataclass
class Config:
    """Runtime configuration; explicit values win over env vars."""

    data_dir: str = ""
    filename: str = ""
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.data_dir:
            self.data_dir = os.environ.get("TASKTRACK_DATA_DIR") or DEFAULT_DATA_DIR
        if not self.filename:
            self.filename = os.environ.get("TASKTRACK_FILE") or DEFAULT_FILENAME

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    @property
    def save_path(self) -> Path:
        return self.data_path / self.filename
