"""Entry point for the burndown CLI.

Usage:
    python -m burndown.interfaces.cli.main

Or via installed entry point:
    burndown <command>
"""

from burndown.interfaces.cli import app


def main() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
