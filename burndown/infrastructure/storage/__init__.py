"""Storage infrastructure.

Provides the persistence layer for the task forest,
using Result types for explicit error handling.
"""

from burndown.infrastructure.storage.json_storage import JsonFile
from burndown.infrastructure.storage.repositories import (
    STORAGE_KEY,
    TaskRepository,
    forest_from_json,
    forest_to_json,
)

__all__ = [
    "JsonFile",
    "TaskRepository",
    "STORAGE_KEY",
    "forest_to_json",
    "forest_from_json",
]
