"""Tests for tasktrack.config.Config defaults and env overrides."""

from __future__ import annotations

from pathlib import Path

from tasktrack.config import DEFAULT_DATA_DIR, DEFAULT_FILENAME, Config


def test_defaults():
    """Config() falls back to ./data/tasks.csv when nothing is set."""
    cfg = Config()
    assert cfg.data_dir == DEFAULT_DATA_DIR
    assert cfg.filename == DEFAULT_FILENAME
    assert cfg.save_path == Path("data") / "tasks.csv"


def test_env_overrides(monkeypatch, tmp_path):
    """TASKTRACK_DATA_DIR and TASKTRACK_FILE replace the defaults."""
    monkeypatch.setenv("TASKTRACK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKTRACK_FILE", "mine.csv")
    cfg = Config()
    assert cfg.save_path == tmp_path / "mine.csv"


def test_explicit_values_beat_env(monkeypatch, tmp_path):
    monkeypatch.setenv("TASKTRACK_DATA_DIR", "/nowhere")
    cfg = Config(data_dir=str(tmp_path), filename="x.csv")
    assert cfg.data_path == tmp_path
    assert cfg.filename == "x.csv"


def test_empty_env_var_is_ignored(monkeypatch):
    monkeypatch.setenv("TASKTRACK_FILE", "")
    assert Config().filename == DEFAULT_FILENAME
