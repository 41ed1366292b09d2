"""Task domain models.

Pure domain models for the task forest. Uses Pydantic so the same classes
validate user input, serialize to the persisted JSON layout and back the
API schemas.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


def to_day(value: Any) -> Any:
    """Reduce a datetime (or ISO datetime string) to its calendar date.

    Anything that is not a datetime is handed back for Pydantic to validate.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value).date()
    return value


class TaskNode(BaseModel):
    """A node in the task forest (can be a task or a grouping).

    Leaf nodes (those without children) carry the estimate and dates that
    feed the burndown. Non-leaf nodes are organizational containers; any
    estimate or dates they still hold are ignored by every aggregate.

    ``parent_id`` is a back-reference for breadcrumbs only. Ownership is
    expressed solely by ``children``.
    """

    id: int
    name: str = Field(min_length=1)
    estimate: float = Field(gt=0)
    parent_id: int | None = Field(default=None, alias="parentId")
    due_on_day: date | None = Field(default=None, alias="dueOnDay")
    completed_on_day: date | None = Field(default=None, alias="completedOnDay")
    children: list["TaskNode"] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @field_validator("due_on_day", "completed_on_day", mode="before")
    @classmethod
    def _truncate_to_day(cls, value: Any) -> Any:
        return to_day(value)

    def is_leaf(self) -> bool:
        """Check if this node is a leaf (schedulable task).

        Leaf nodes have no children and represent actual work items.
        Non-leaf nodes are organizational containers.
        """
        return len(self.children) == 0

    def is_completed(self) -> bool:
        return self.completed_on_day is not None

    def with_changes(self, changes: dict[str, Any]) -> "TaskNode":
        """Return a copy with ``changes`` applied and validated.

        Unlike ``model_copy(update=...)`` the result goes through the same
        field validation as a freshly built node. Children are carried over
        by reference.

        Raises:
            pydantic.ValidationError: If a changed field is invalid.
        """
        return type(self).model_validate({**dict(self), **changes})


Forest = list[TaskNode]
