"""Repository for the persisted task forest.

The snapshot is a single JSON document keyed by ``"tasks"``:

    {"tasks": [{"id": 1, "name": "...", "estimate": 3.0, "parentId": null,
                "dueOnDay": "2025-09-17", "completedOnDay": null,
                "children": [...]}]}

A bare top-level array, as written by the browser version, is accepted
on load as well.
"""

from collections import Counter
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from burndown.domain.shared.result import Err, Ok, Result
from burndown.domain.task.models import Forest, TaskNode
from burndown.domain.task.traversal import collect_ids
from burndown.infrastructure.storage.json_storage import JsonFile

STORAGE_KEY = "tasks"

_forest_adapter = TypeAdapter(list[TaskNode])


def forest_to_json(forest: Forest) -> list[dict[str, Any]]:
    """Dump a forest to plain JSON values using the camelCase keys."""
    return _forest_adapter.dump_python(forest, mode="json", by_alias=True)


def forest_from_json(data: Any) -> Result[Forest, str]:
    """Rebuild a forest from a loaded snapshot.

    Args:
        data: Either ``{"tasks": [...]}`` or a bare list of task objects.

    Returns:
        Ok(forest), or Err(str) when the payload is not a valid forest
        (wrong shape, bad field values, or the same id used twice).
    """
    if isinstance(data, dict):
        if STORAGE_KEY not in data:
            return Err(f"Snapshot has no '{STORAGE_KEY}' key")
        data = data[STORAGE_KEY]

    try:
        forest = _forest_adapter.validate_python(data)
    except ValidationError as e:
        return Err(f"Invalid task data: {e.error_count()} validation error(s): {e}")

    duplicates = sorted(task_id for task_id, count in Counter(collect_ids(forest)).items() if count > 1)
    if duplicates:
        return Err(f"Duplicate task ids in snapshot: {duplicates}")

    return Ok(forest)


class TaskRepository:
    """Repository for task forest persistence.

    Owns one JsonFile; every save replaces the whole snapshot.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._file = JsonFile(path)

    def load(self) -> Result[Forest, str]:
        """Load the persisted forest.

        Returns:
            Ok(forest) if successful. A missing file is an empty forest.
            Err(str) if the file exists but cannot be read or parsed.
        """
        if not self.path.exists():
            # Nothing saved yet - not an error
            return Ok([])

        result = self._file.read()
        if isinstance(result, Err):
            return result

        return forest_from_json(result.value)

    def save(self, forest: Forest) -> Result[None, str]:
        """Persist the forest, replacing the previous snapshot.

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        return self._file.write({STORAGE_KEY: forest_to_json(forest)})

    def exists(self) -> bool:
        """Check if a snapshot has been written."""
        return self._file.exists()

    def quarantine(self) -> Result[Path, str]:
        """Move an unreadable snapshot out of the way, keeping its content.

        Returns:
            Ok(path) with where the old file now lives, or Err(str).
        """
        return self._file.move_aside("corrupt")
