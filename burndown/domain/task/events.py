"""Task domain events.

Immutable records of committed changes to the forest or the axis. The
store publishes one with every new forest so subscribers can react to the
kind of change without diffing trees.

All events are pure data structures - no I/O, no side effects.
"""

from datetime import date
from typing import Any

from burndown.domain.shared.events import DomainEvent


class TaskAdded(DomainEvent):
    """A new leaf was inserted under ``parent_id`` (None for a root)."""

    task_id: int
    parent_id: int | None
    task_name: str


class TaskUpdated(DomainEvent):
    """Fields of an existing task were replaced.

    ``changes`` maps field names to their new values.
    """

    task_id: int
    changes: dict[str, Any]


class TaskDeleted(DomainEvent):
    """A task and its whole subtree were removed."""

    task_id: int
    task_name: str
    removed_ids: list[int]


class AxisChanged(DomainEvent):
    """The burndown date range was reconfigured."""

    start: date
    days: int
