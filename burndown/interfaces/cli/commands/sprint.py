"""Sprint CLI commands.

Burndown chart output and configuration of the date axis it covers.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from burndown.domain.shared import Err
from burndown.global_config import save_global_config
from burndown.interfaces.cli.common import load_store, parse_day, print_error, print_info, print_success

app = typer.Typer(help="Sprint axis and burndown commands")

console = Console()


@app.command("chart")
def chart() -> None:
    """Show the burndown series for the configured axis."""
    _, store = load_store()
    points = store.burndown()
    summary = store.summary()

    table = Table(title=f"Burndown {store.axis()}")
    table.add_column("Date")
    table.add_column("Ideal", justify="right")
    table.add_column("Actual", justify="right")
    table.add_column("Due", justify="right")

    today = store.today()
    for point in points:
        label = point.date.isoformat()
        if point.date == today:
            label += " *"
        table.add_row(
            label,
            f"{point.ideal_remaining:g}",
            f"{point.actual_remaining:g}",
            f"{point.due_remaining:g}",
        )

    console.print(table)
    console.print(
        f"Total {summary.total_estimate:g}pt, remaining {summary.remaining:g}pt "
        f"({summary.progress_percent}% complete)"
    )


@app.command("axis")
def axis(
    start: Optional[str] = typer.Option(None, "--start", "-s", help="First day (YYYY-MM-DD or today)"),
    days: Optional[int] = typer.Option(None, "--days", "-n", help="Number of days on the axis"),
) -> None:
    """Show or change the burndown date range."""
    config, store = load_store()
    if start is None and days is None:
        print_info(f"Axis: {store.axis()}")
        return

    start_day = parse_day(start, store.today()) if start is not None else None
    result = store.set_axis(start_day, days)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    updates: dict = {}
    if start is not None:
        # "today" keeps the axis floating with the calendar
        updates["axis_start"] = None if start.strip().lower() == "today" else start_day
    if days is not None:
        updates["axis_days"] = days
    save_global_config(config.model_copy(update=updates))
    print_success(f"Axis set to {result.value}")
