"""Request/Response schemas for the burndown API.

These Pydantic models define the API contract for request and response
bodies. Task nodes and burndown points are returned as the domain models
themselves, serialized with their camelCase aliases.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from burndown.domain.task import BurndownPoint, BurndownSummary, TaskNode
from burndown.domain.types import DateAxis


# =============================================================================
# Task Schemas
# =============================================================================


class AddTaskRequest(BaseModel):
    """Request to add a leaf task.

    Name, estimate and due date are checked by the store so a rejected
    add comes back as a 400 with the store's reason.
    """

    name: str = ""
    estimate: float = 1.0
    parent_id: Optional[int] = Field(default=None, alias="parentId")
    due_on_day: Optional[date] = Field(default=None, alias="dueOnDay")

    model_config = {"populate_by_name": True}


class UpdateEstimateRequest(BaseModel):
    """Request to change a task's estimate."""

    estimate: float


class UpdateDayRequest(BaseModel):
    """Request to set (or with null, clear) a due or completion date."""

    day: Optional[date] = None


class ChangeResponse(BaseModel):
    """Whether a command changed anything (False for an unknown id)."""

    changed: bool


class BreadcrumbResponse(BaseModel):
    """Ancestor names for a task, outermost first."""

    names: list[str]
    label: str


class RangeTaskResponse(BaseModel):
    """A side-panel entry: the leaf plus its ancestors."""

    task: TaskNode
    breadcrumb: list[str]


# =============================================================================
# Axis / Burndown Schemas
# =============================================================================


class AxisResponse(BaseModel):
    """The configured date axis, expanded."""

    start: date
    end: date
    days: int
    dates: list[date]

    @classmethod
    def from_axis(cls, axis: DateAxis) -> "AxisResponse":
        return cls(start=axis.start, end=axis.end, days=axis.days, dates=axis.dates())


class UpdateAxisRequest(BaseModel):
    """Request to change the axis; omitted fields keep their value."""

    start: Optional[date] = None
    days: Optional[int] = None


class BurndownResponse(BaseModel):
    """Everything a chart needs in one payload."""

    axis: AxisResponse
    points: list[BurndownPoint]
    summary: BurndownSummary
