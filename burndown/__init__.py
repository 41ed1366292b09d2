"""Burndown - hierarchical sprint task tracking with burndown projection."""

__version__ = "0.1.0"
