"""Shared fixtures for tasktrack tests.

File handling in tests:
- Use tmp_path for the data directory so tests are isolated and cleaned up.
- Use tasktrack.io_utils read_text/write_text for consistent UTF-8 I/O.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tasktrack.config import Config
from tasktrack.store import TaskStore
from tasktrack.tasks.manager import TaskManager
from tasktrack.tasks.model import IdSequence

TS = "2024-01-01T00:00:00.000Z"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's TASKTRACK_* variables out of the tests."""
    monkeypatch.delenv("TASKTRACK_DATA_DIR", raising=False)
    monkeypatch.delenv("TASKTRACK_FILE", raising=False)


@pytest.fixture
def ids() -> IdSequence:
    return IdSequence()


@pytest.fixture
def manager() -> TaskManager:
    return TaskManager()


@pytest.fixture
def cfg(tmp_path: Path) -> Config:
    return Config(data_dir=str(tmp_path / "data"), filename="test-tasks.csv")


@pytest.fixture
def store(cfg: Config) -> TaskStore:
    return TaskStore(cfg)


def _make_row(
    id: int = 1,
    title: str = '"Task"',
    description: str = '""',
    completed: str = "false",
    created_at: str = TS,
    updated_at: str = TS,
    completed_at: str = "",
) -> str:
    return ";".join([str(id), title, description, completed, created_at, updated_at, completed_at])


@pytest.fixture
def make_row():
    """Factory fixture that builds raw rows; title/description are passed pre-quoted."""
    return _make_row
