"""CLI command groups.

Command groups:
- task: Forest editing and listing (add, estimate, due, complete, range, ...)
- sprint: Burndown chart and axis configuration

Each command group is a Typer app registered with the main app
using app.add_typer().
"""

from burndown.interfaces.cli.commands import sprint, task

__all__ = ["task", "sprint"]
