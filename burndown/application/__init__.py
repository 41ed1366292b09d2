"""Application service layer.

The task store orchestrates domain operations: it owns the current forest,
turns commands into new forests, persists them and notifies subscribers.

Example usage:
    >>> from burndown.application import open_store
    >>> from burndown.infrastructure.storage import TaskRepository
    >>>
    >>> store = open_store(TaskRepository(Path("tasks.json")))
    >>> for point in store.burndown():
    ...     print(point.date, point.actual_remaining)
"""

from burndown.application.task_store import (
    IdGenerator,
    Subscriber,
    TaskStore,
    in_range,
    open_store,
)

__all__ = [
    "TaskStore",
    "IdGenerator",
    "Subscriber",
    "in_range",
    "open_store",
]
