"""CLI interface using Typer.

Usage:
    burndown add "Write docs" -e 3 -d 2025-09-17 -p 1700000000000
    burndown list
    burndown today --mode untilToday
    burndown chart

The CLI is structured as:
- app: Main Typer application
- commands/: Command groups (task, sprint)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
from typing import Optional

import typer

from burndown import __version__
from burndown.domain.types import RangeMode
from burndown.interfaces.cli.commands import sprint, task

app = typer.Typer(
    name="burndown",
    help="Hierarchical sprint tasks with a burndown chart",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"burndown version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log store activity"),
) -> None:
    """Burndown - sprint task tree and burndown chart.

    Tasks nest to any depth; only leaf tasks carry estimates and dates.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(task.app, name="task")
app.add_typer(sprint.app, name="sprint")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("add")
def add(
    name: str = typer.Argument(..., help="Task name"),
    estimate: float = typer.Option(1.0, "--estimate", "-e", help="Story points"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help="Due date (YYYY-MM-DD or today)"),
    parent: Optional[int] = typer.Option(None, "--parent", "-p", help="Parent task id"),
) -> None:
    """Add a task (shortcut for 'task add')."""
    task.add(name=name, estimate=estimate, due=due, parent=parent)


@app.command("list")
def list_tasks() -> None:
    """Show the task tree (shortcut for 'task list')."""
    task.list_tasks()


@app.command("today")
def today(
    mode: RangeMode = typer.Option(RangeMode.TODAY, "--mode", "-m", help="today, untilToday or fromToday"),
) -> None:
    """Show tasks due around today (shortcut for 'task range')."""
    task.show_range(mode=mode)


@app.command("chart")
def chart() -> None:
    """Show the burndown (shortcut for 'sprint chart')."""
    sprint.chart()


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", help="Port to listen on"),
) -> None:
    """Serve the JSON API for a local frontend."""
    import uvicorn

    from burndown.interfaces.api import create_app
    from burndown.interfaces.cli.common import load_store

    _, store = load_store()
    uvicorn.run(create_app(store), host=host, port=port)


__all__ = ["app"]
