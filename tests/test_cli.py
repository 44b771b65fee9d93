"""CLI tests: one-shot commands and the interactive menu, run in-process."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from tasktrack import __version__
from tasktrack.cli import main, parse_task_id
from tasktrack.errors import SAVE_FAILED, StorageError
from tasktrack.io_utils import read_text, write_text
from tasktrack.tasks.codec import HEADER


@pytest.fixture
def cli_runner():
    """Click CliRunner for invoking the CLI in-process."""
    from click.testing import CliRunner
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def run(cli_runner, data_dir):
    """Invoke the CLI against the temporary data directory."""

    def _run(args: list[str], input: str | None = None):
        return cli_runner.invoke(main, ["--data-dir", str(data_dir), *args], input=input)

    return _run


def _rows(data_dir: Path) -> list[str]:
    return read_text(data_dir / "tasks.csv").split("\n")[1:]


# ── Help and version ────────────────────────────────────────────────


class TestCliHelpAndVersion:

    def test_help_long(self, cli_runner):
        r = cli_runner.invoke(main, ["--help"])
        assert r.exit_code == 0
        assert "TASKTRACK" in r.output

    def test_help_short(self, cli_runner):
        r = cli_runner.invoke(main, ["-h"])
        assert r.exit_code == 0

    def test_version(self, cli_runner):
        r = cli_runner.invoke(main, ["--version"])
        assert r.exit_code == 0
        assert __version__ in r.output


def test_parse_task_id():
    assert parse_task_id(" 12 ") == 12
    assert parse_task_id("abc") is None
    assert parse_task_id("") is None


# ── One-shot commands ───────────────────────────────────────────────


class TestCommands:

    def test_add_writes_save_file(self, run, data_dir):
        r = run(["add", "Buy milk", "-d", "2% milk"])
        assert r.exit_code == 0, r.output
        rows = _rows(data_dir)
        assert len(rows) == 1
        assert rows[0].startswith('1;"Buy milk";"2% milk";false;')

    def test_add_blank_title_rejected(self, run, data_dir):
        r = run(["add", "   "])
        assert r.exit_code != 0
        assert not (data_dir / "tasks.csv").exists()

    def test_ids_continue_across_invocations(self, run, data_dir):
        run(["add", "one"])
        run(["add", "two"])
        assert [row.split(";")[0] for row in _rows(data_dir)] == ["1", "2"]

    def test_list_filters(self, run):
        run(["add", "alpha"])
        run(["add", "beta"])
        run(["toggle", "1"])
        r = run(["list", "--completed"])
        assert "alpha" in r.output
        assert "beta" not in r.output
        r = run(["list", "--pending"])
        assert "beta" in r.output
        assert "alpha" not in r.output

    def test_list_conflicting_flags(self, run):
        r = run(["list", "--completed", "--pending"])
        assert r.exit_code != 0

    def test_list_empty(self, run):
        r = run(["list"])
        assert r.exit_code == 0
        assert "empty" in r.output

    def test_toggle_marks_completed(self, run, data_dir):
        run(["add", "T"])
        r = run(["toggle", "1"])
        assert r.exit_code == 0, r.output
        fields = _rows(data_dir)[0].split(";")
        assert fields[3] == "true"
        assert fields[6] != ""

    def test_toggle_missing_id(self, run):
        r = run(["toggle", "42"])
        assert r.exit_code == 1
        assert "Task 42 not found" in r.output

    def test_update(self, run, data_dir):
        run(["add", "Old", "-d", "desc"])
        r = run(["update", "1", "--title", "New"])
        assert r.exit_code == 0, r.output
        assert _rows(data_dir)[0].startswith('1;"New";"desc";')

    def test_update_requires_a_change(self, run):
        run(["add", "Old"])
        r = run(["update", "1"])
        assert r.exit_code != 0

    def test_remove_with_yes(self, run, data_dir):
        run(["add", "gone"])
        r = run(["remove", "1", "--yes"])
        assert r.exit_code == 0, r.output
        assert _rows(data_dir) == []

    def test_remove_declined(self, run, data_dir):
        run(["add", "stay"])
        r = run(["remove", "1"], input="n\n")
        assert r.exit_code == 1
        assert len(_rows(data_dir)) == 1

    def test_stats(self, run):
        run(["add", "a"])
        run(["add", "b"])
        run(["toggle", "1"])
        r = run(["stats"])
        assert "Total tasks: 2" in r.output
        assert "Completed: 1" in r.output
        assert "50.0%" in r.output

    def test_clear(self, run, data_dir):
        run(["add", "a"])
        run(["add", "b"])
        r = run(["clear", "--yes"])
        assert r.exit_code == 0
        assert _rows(data_dir) == []

    def test_backup_and_reset(self, run, data_dir):
        run(["add", "a"])
        r = run(["backup"])
        assert r.exit_code == 0, r.output
        assert len(list(data_dir.glob("tasks-backup-*.csv"))) == 1

        r = run(["reset", "--yes"])
        assert r.exit_code == 0
        assert not (data_dir / "tasks.csv").exists()

    def test_loads_partially_corrupt_file(self, run, data_dir):
        data_dir.mkdir(parents=True)
        write_text(
            data_dir / "tasks.csv",
            "\n".join([
                HEADER,
                '7;"Survivor";"";false;2024-01-01T00:00:00.000Z;2024-01-01T00:00:00.000Z;',
                "broken;row",
            ]),
        )
        r = run(["add", "next"])
        assert r.exit_code == 0, r.output
        assert "Some lines could not be loaded" in r.output
        assert [row.split(";")[0] for row in _rows(data_dir)] == ["7", "8"]

    def test_save_failure_exits_nonzero(self, run):
        with patch("tasktrack.cli.TaskStore.save_tasks", side_effect=StorageError(SAVE_FAILED, "disk full")):
            r = run(["add", "x"])
        assert r.exit_code == 1
        assert "Failed to save tasks: disk full" in r.output

    def test_file_option(self, cli_runner, data_dir):
        r = cli_runner.invoke(main, ["--data-dir", str(data_dir), "--file", "other.csv", "add", "x"])
        assert r.exit_code == 0, r.output
        assert (data_dir / "other.csv").exists()


# ── Interactive menu ────────────────────────────────────────────────


class TestMenu:

    def test_exit_immediately(self, run):
        r = run([], input="0\n")
        assert r.exit_code == 0
        assert "MAIN MENU" in r.output

    def test_eof_ends_loop(self, run):
        r = run([], input="")
        assert r.exit_code == 0

    def test_add_then_exit_saves(self, run, data_dir):
        r = run([], input="1\nBuy milk\n2% milk\n0\n")
        assert r.exit_code == 0, r.output
        assert _rows(data_dir)[0].startswith('1;"Buy milk";"2% milk";false;')

    def test_add_blank_title_not_saved(self, run, data_dir):
        r = run([], input="1\n\n0\n")
        assert r.exit_code == 0
        assert not (data_dir / "tasks.csv").exists()

    def test_invalid_choice(self, run):
        r = run([], input="42\n0\n")
        assert "Invalid choice" in r.output

    def test_toggle_via_menu(self, run, data_dir):
        run(["add", "T"])
        r = run([], input="6\n1\n0\n")
        assert r.exit_code == 0, r.output
        assert _rows(data_dir)[0].split(";")[3] == "true"

    def test_toggle_invalid_id(self, run, data_dir):
        run(["add", "T"])
        r = run([], input="6\nabc\n0\n")
        assert "Invalid task ID" in r.output
        assert _rows(data_dir)[0].split(";")[3] == "false"

    def test_update_via_menu(self, run, data_dir):
        run(["add", "Old", "-d", "keep"])
        r = run([], input="5\n1\nNew\n\n0\n")
        assert r.exit_code == 0, r.output
        assert _rows(data_dir)[0].startswith('1;"New";"keep";')

    def test_remove_via_menu(self, run, data_dir):
        run(["add", "gone"])
        r = run([], input="7\n1\ny\n0\n")
        assert r.exit_code == 0, r.output
        assert _rows(data_dir) == []

    def test_clear_requires_yes(self, run, data_dir):
        run(["add", "a"])
        run([], input="9\nno\n0\n")
        assert len(_rows(data_dir)) == 1
        run([], input="9\nyes\n0\n")
        assert _rows(data_dir) == []

    def test_unreadable_save_file_stops_menu_untouched(self, run, data_dir):
        data_dir.mkdir(parents=True)
        path = data_dir / "tasks.csv"
        original = (
            HEADER + '\n1;"Keep me \xff";"";false;2024-01-01T00:00:00.000Z;2024-01-01T00:00:00.000Z;'
        ).encode("latin-1")
        path.write_bytes(original)

        r = run([], input="1\nnew\n\n0\n")

        assert r.exit_code == 1
        assert "Failed to load tasks" in r.output
        assert path.read_bytes() == original

    def test_stats_via_menu(self, run):
        r = run([], input="8\n0\n")
        assert "Total tasks: 0" in r.output
