"""Tests for tasktrack.io_utils file primitives."""

from __future__ import annotations

import pytest

from tasktrack.io_utils import copy_file, delete_file, ensure_dir, file_exists, read_text, write_text


def test_write_then_read_utf8(tmp_path):
    path = tmp_path / "f.csv"
    write_text(path, "café ✅")
    assert read_text(path) == "café ✅"


def test_read_missing_raises_file_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_text(tmp_path / "missing.csv")


def test_ensure_dir_reports_creation(tmp_path):
    target = tmp_path / "a" / "b"
    assert ensure_dir(target) is True
    assert ensure_dir(target) is False
    assert target.is_dir()


def test_delete_file(tmp_path):
    path = tmp_path / "f"
    write_text(path, "x")
    assert delete_file(path) is True
    assert delete_file(path) is False
    assert not file_exists(path)


def test_copy_file(tmp_path):
    src = tmp_path / "src.csv"
    write_text(src, "data")
    dst = copy_file(src, str(tmp_path / "dst.csv"))
    assert dst == tmp_path / "dst.csv"
    assert read_text(dst) == "data"
