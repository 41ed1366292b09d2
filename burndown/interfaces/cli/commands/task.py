"""Task management CLI commands.

Commands for editing the forest: adding leaves, changing estimates and
dates, deleting subtrees, and listing the tree and side-panel ranges.
"""

from typing import Optional

import typer

from burndown.domain.shared import Err, Result
from burndown.domain.types import RangeMode
from burndown.interfaces.cli.common import (
    load_store,
    parse_day,
    print_error,
    print_forest,
    print_header,
    print_info,
    print_success,
    print_task_with_breadcrumb,
    print_warning,
)

app = typer.Typer(help="Task management commands")

RANGE_TITLES = {
    RangeMode.TODAY: "Due today",
    RangeMode.UNTIL_TODAY: "Due until today (open or due today)",
    RangeMode.FROM_TODAY: "Due from today (open or due today)",
}


def _report(result: Result[bool, str], task_id: int, done_msg: str) -> None:
    """Print the outcome of an update-style command.

    Raises:
        typer.Exit: With code 1 when the command was rejected.
    """
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    if result.value:
        print_success(done_msg)
    else:
        print_warning(f"No task with id {task_id}; nothing changed.")


@app.command("add")
def add(
    name: str = typer.Argument(..., help="Task name"),
    estimate: float = typer.Option(1.0, "--estimate", "-e", help="Story points"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help="Due date (YYYY-MM-DD or today)"),
    parent: Optional[int] = typer.Option(None, "--parent", "-p", help="Parent task id"),
) -> None:
    """Add a leaf task, optionally under a parent."""
    _, store = load_store()
    due_on_day = parse_day(due, store.today()) if due is not None else None

    result = store.add_leaf(name, estimate, parent, due_on_day)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    print_success(f"Added task #{result.value.id}: {result.value.name}")


@app.command("list")
def list_tasks() -> None:
    """Show the task tree."""
    _, store = load_store()
    print_forest(store)


@app.command("estimate")
def estimate(
    task_id: int = typer.Argument(..., help="Task id"),
    value: float = typer.Argument(..., help="New estimate"),
) -> None:
    """Change a task's estimate."""
    _, store = load_store()
    _report(store.update_estimate(task_id, value), task_id, f"Task #{task_id} estimate set to {value:g}")


@app.command("due")
def due(
    task_id: int = typer.Argument(..., help="Task id"),
    day: str = typer.Argument(..., help="Due date, or 'none' to clear"),
) -> None:
    """Set or clear a task's due date."""
    _, store = load_store()
    due_on_day = parse_day(day, store.today())
    label = due_on_day.isoformat() if due_on_day else "unset"
    _report(store.update_due_on_day(task_id, due_on_day), task_id, f"Task #{task_id} due date {label}")


@app.command("complete")
def complete(
    task_id: int = typer.Argument(..., help="Task id"),
    day: str = typer.Argument("today", help="Completion date"),
) -> None:
    """Mark a task completed (today unless a date is given)."""
    _, store = load_store()
    completed_on_day = parse_day(day, store.today())
    label = completed_on_day.isoformat() if completed_on_day else "unset"
    _report(
        store.update_completed_on_day(task_id, completed_on_day),
        task_id,
        f"Task #{task_id} completed {label}",
    )


@app.command("reopen")
def reopen(task_id: int = typer.Argument(..., help="Task id")) -> None:
    """Clear a task's completion date."""
    _, store = load_store()
    _report(store.update_completed_on_day(task_id, None), task_id, f"Task #{task_id} reopened")


@app.command("toggle")
def toggle(task_id: int = typer.Argument(..., help="Task id")) -> None:
    """Flip a task between completed today and open."""
    _, store = load_store()
    _report(store.toggle_completed(task_id), task_id, f"Task #{task_id} toggled")


@app.command("delete")
def delete(task_id: int = typer.Argument(..., help="Task id")) -> None:
    """Delete a task and everything under it."""
    _, store = load_store()
    _report(store.delete_task(task_id), task_id, f"Task #{task_id} deleted")


@app.command("range")
def show_range(
    mode: RangeMode = typer.Option(RangeMode.TODAY, "--mode", "-m", help="today, untilToday or fromToday"),
) -> None:
    """Show due-dated tasks around today."""
    _, store = load_store()
    tasks = store.tasks_in_range(mode)

    print_header(f"{RANGE_TITLES[mode]} - {store.today().isoformat()}")
    if not tasks:
        print_info("No matching tasks.")
        return
    for task in tasks:
        print_task_with_breadcrumb(store, task)
