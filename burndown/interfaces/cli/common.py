"""Shared utilities for CLI commands.

This module provides common utilities used across CLI commands:
- Store construction from the global configuration
- Formatted output helpers (error, success, info)
- Date argument parsing
- Task and tree formatting for display
"""

from datetime import date, timedelta

import typer

from burndown.application import TaskStore, open_store
from burndown.domain.task import TaskNode, format_breadcrumb, walk
from burndown.global_config import SprintConfig, get_data_file, get_global_config
from burndown.infrastructure.storage import TaskRepository

NONE_WORDS = {"none", "null", "-", ""}


def load_store() -> tuple[SprintConfig, TaskStore]:
    """Open the persisted store using the saved configuration.

    Returns:
        The configuration in effect and a store bound to its data file.
    """
    config = get_global_config()
    repository = TaskRepository(get_data_file(config))
    store = open_store(repository, axis=config.axis(date.today()))
    return config, store


def print_error(msg: str) -> None:
    """Print a formatted error message."""
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message."""
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    """Print a formatted info message."""
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_warning(msg: str) -> None:
    """Print a formatted warning message."""
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


def print_separator(char: str = "=", width: int = 60) -> None:
    """Print a separator line."""
    typer.echo(char * width)


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with separators."""
    print_separator("=", width)
    typer.echo(title)
    print_separator("=", width)


def parse_day(value: str, today: date | None = None) -> date | None:
    """Parse a day argument.

    Accepts ISO dates (2025-09-17), "today", "yesterday", "tomorrow", and
    "none" to clear a date.

    Raises:
        typer.BadParameter: If the value is not a recognisable day.
    """
    text = value.strip().lower()
    if text in NONE_WORDS:
        return None

    today = today or date.today()
    relative = {"today": 0, "yesterday": -1, "tomorrow": 1}
    if text in relative:
        return today + timedelta(days=relative[text])

    try:
        return date.fromisoformat(text)
    except ValueError:
        raise typer.BadParameter(f"Not a date: {value!r} (use YYYY-MM-DD, today or none)") from None


def format_day(day: date | None, empty: str = "-") -> str:
    return day.isoformat() if day else empty


def format_task_line(task: TaskNode) -> str:
    """One-line summary of a task: id, name and, for leaves, schedule."""
    if not task.is_leaf():
        return f"{task.name} (#{task.id})"

    mark = "[x]" if task.is_completed() else "[ ]"
    details = f"{task.estimate:g}pt, due {format_day(task.due_on_day)}"
    if task.completed_on_day:
        details += f", done {format_day(task.completed_on_day)}"
    return f"{mark} {task.name} (#{task.id}) {details}"


def print_forest(store: TaskStore) -> None:
    """Print the forest as an indented tree."""
    forest = store.get_forest()
    if not forest:
        print_info("No tasks yet. Add one with: burndown add NAME --due DATE")
        return
    for task, depth in walk(forest):
        typer.echo(f"{'  ' * depth}- {format_task_line(task)}")


def print_task_with_breadcrumb(store: TaskStore, task: TaskNode) -> None:
    """Print a leaf for a side panel, with its ancestors above it."""
    crumb = format_breadcrumb(store.breadcrumb(task.id))
    if crumb:
        typer.echo(typer.style(crumb, dim=True))
    typer.echo(f"  {format_task_line(task)}")
