"""Tests for the Typer CLI."""

from datetime import date, timedelta

import pytest
from typer.testing import CliRunner

from burndown import __version__
from burndown.global_config import get_global_config
from burndown.interfaces.cli import app
from burndown.interfaces.cli.common import load_store, parse_day

runner = CliRunner()


@pytest.fixture(autouse=True)
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("BURNDOWN_HOME", str(tmp_path))
    return tmp_path


def _store():
    return load_store()[1]


def _add(*args):
    result = runner.invoke(app, ["add", *args])
    assert result.exit_code == 0, result.output
    return _store().get_forest()[-1]


class TestTaskCommands:
    """Tests for adding, editing and listing tasks."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_empty_list(self):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "No tasks yet" in result.output

    def test_add_and_list(self, home):
        result = runner.invoke(app, ["task", "add", "Write docs", "-e", "3", "-d", "today"])
        assert result.exit_code == 0
        assert "Added task #" in result.output
        assert (home / "tasks.json").exists()

        listing = runner.invoke(app, ["list"])
        assert "[ ] Write docs" in listing.output
        assert f"3pt, due {date.today().isoformat()}" in listing.output

    def test_add_without_due_date_fails(self):
        result = runner.invoke(app, ["add", "No date"])
        assert result.exit_code == 1
        assert "due date" in result.output
        assert _store().get_forest() == []

    def test_add_under_unknown_parent_fails(self):
        result = runner.invoke(app, ["add", "Lost", "-d", "today", "-p", "42"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_nested_add_shows_indented_tree(self):
        parent = _add("Release", "-d", "today")
        runner.invoke(app, ["add", "Docs", "-d", "tomorrow", "-p", str(parent.id)])

        listing = runner.invoke(app, ["list"]).output
        assert f"- Release (#{parent.id})" in listing
        assert "  - [ ] Docs" in listing

    def test_bad_date_is_usage_error(self):
        result = runner.invoke(app, ["add", "x", "-d", "soon"])
        assert result.exit_code == 2

    def test_estimate_and_unknown_id(self):
        task = _add("A", "-d", "today")

        result = runner.invoke(app, ["task", "estimate", str(task.id), "5"])
        assert result.exit_code == 0
        assert _store().find(task.id).estimate == 5

        missing = runner.invoke(app, ["task", "estimate", "999", "5"])
        assert missing.exit_code == 0
        assert "Warning: No task with id 999" in missing.output

    def test_non_positive_estimate_fails(self):
        task = _add("A", "-d", "today")
        result = runner.invoke(app, ["task", "estimate", str(task.id), "0"])
        assert result.exit_code == 1

    def test_due_complete_reopen(self):
        task = _add("A", "-d", "today")

        runner.invoke(app, ["task", "due", str(task.id), "none"])
        assert _store().find(task.id).due_on_day is None

        runner.invoke(app, ["task", "complete", str(task.id)])
        assert _store().find(task.id).completed_on_day == date.today()

        runner.invoke(app, ["task", "reopen", str(task.id)])
        assert _store().find(task.id).completed_on_day is None

        runner.invoke(app, ["task", "toggle", str(task.id)])
        assert _store().find(task.id).is_completed()

    def test_delete_removes_subtree(self):
        parent = _add("Release", "-d", "today")
        runner.invoke(app, ["add", "Docs", "-d", "today", "-p", str(parent.id)])

        result = runner.invoke(app, ["task", "delete", str(parent.id)])
        assert result.exit_code == 0
        assert _store().get_forest() == []


class TestRangeCommand:
    def test_today_shows_breadcrumb(self):
        parent = _add("Release", "-d", "today")
        runner.invoke(app, ["add", "Docs", "-d", "today", "-p", str(parent.id)])

        output = runner.invoke(app, ["today"]).output
        assert "Due today" in output
        assert "[Release]" in output
        assert "Docs" in output

    def test_until_today_skips_completed_overdue(self):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        task = _add("Old", "-d", yesterday)
        _add("Late", "-d", yesterday)
        runner.invoke(app, ["task", "complete", str(task.id)])

        output = runner.invoke(app, ["task", "range", "--mode", "untilToday"]).output
        assert "Late" in output
        assert "Old" not in output

    def test_empty_range(self):
        output = runner.invoke(app, ["task", "range", "-m", "fromToday"]).output
        assert "No matching tasks" in output


class TestSprintCommands:
    """Tests for the chart and axis commands."""

    def test_chart(self):
        _add("A", "-e", "2", "-d", "today")
        result = runner.invoke(app, ["chart"])
        assert result.exit_code == 0
        assert "Burndown" in result.output
        assert "Total 2pt, remaining 2pt" in result.output

    def test_show_axis(self):
        result = runner.invoke(app, ["sprint", "axis"])
        assert result.exit_code == 0
        assert "(14 days)" in result.output

    def test_set_axis_is_saved(self):
        result = runner.invoke(app, ["sprint", "axis", "--start", "2025-09-01", "--days", "3"])
        assert result.exit_code == 0
        config = get_global_config()
        assert config.axis_days == 3
        assert config.axis_start == date(2025, 9, 1)
        assert _store().axis_dates() == [date(2025, 9, 1), date(2025, 9, 2), date(2025, 9, 3)]

    def test_today_start_floats(self):
        runner.invoke(app, ["sprint", "axis", "--start", "today"])
        assert get_global_config().axis_start is None

    def test_zero_days_fails(self):
        result = runner.invoke(app, ["sprint", "axis", "--days", "0"])
        assert result.exit_code == 1
        assert get_global_config().axis_days == 14


class TestParseDay:
    def test_words(self):
        today = date(2025, 9, 17)
        assert parse_day("today", today) == today
        assert parse_day("Yesterday", today) == date(2025, 9, 16)
        assert parse_day("tomorrow", today) == date(2025, 9, 18)
        assert parse_day("none", today) is None
        assert parse_day("2025-01-02", today) == date(2025, 1, 2)
