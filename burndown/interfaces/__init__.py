"""Interfaces layer.

Adapters for external interactions:
- CLI: Command-line interface using Typer
- API: JSON API using FastAPI

The interfaces layer is responsible for:
- Accepting user input and validating it
- Calling the task store
- Formatting output for the user
"""

from burndown.interfaces.cli import app

__all__ = ["app"]
