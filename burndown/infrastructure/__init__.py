"""Infrastructure layer.

Clean interfaces for I/O, returning Result types for explicit error
handling.

Exports:
    Storage:
        - JsonFile: One JSON document with atomic writes
        - TaskRepository: Task forest persistence
"""

from burndown.infrastructure.storage import JsonFile, TaskRepository

__all__ = [
    "JsonFile",
    "TaskRepository",
]
