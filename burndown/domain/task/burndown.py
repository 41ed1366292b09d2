"""Burndown projection.

Pure functions turning a date axis and a set of leaf tasks into the three
remaining-work series drawn on a burndown chart.
All functions are pure - no I/O, no side effects.
"""

from collections.abc import Sequence
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, Field, computed_field

from .models import Forest, TaskNode
from .traversal import collect_leaves

# =============================================================================
# Constants
# =============================================================================

DEFAULT_AXIS_DAYS = 14  # Two-week sprint
PRECISION = Decimal("0.01")


# =============================================================================
# Value Objects
# =============================================================================


class BurndownPoint(BaseModel):
    """Remaining work on one day of the axis.

    ideal_remaining is the even burn line from the total down to zero,
    actual_remaining subtracts work completed on or before the day, and
    due_remaining subtracts work planned to be finished by the day.
    """

    date: date
    ideal_remaining: float = Field(alias="idealRemaining")
    actual_remaining: float = Field(alias="actualRemaining")
    due_remaining: float = Field(alias="dueRemaining")

    model_config = {"frozen": True, "populate_by_name": True}


class BurndownSummary(BaseModel):
    """Headline numbers for a projected series."""

    total_estimate: float = Field(alias="totalEstimate")
    remaining: float
    completed: float
    points: int

    model_config = {"populate_by_name": True}

    @computed_field(alias="progressPercent")
    @property
    def progress_percent(self) -> float:
        """Calculate completion percentage."""
        if self.total_estimate == 0:
            return 0.0
        return round(self.completed / self.total_estimate * 100, 1)


# =============================================================================
# Projection
# =============================================================================


def round2(value: float) -> float:
    """Round to two decimals, halves away from zero.

    Goes through the shortest decimal repr of the float so 0.125 becomes
    0.13 rather than whatever its binary neighbour rounds to.
    """
    return float(Decimal(repr(value)).quantize(PRECISION, rounding=ROUND_HALF_UP))


def build_axis(start: date, days: int) -> list[date]:
    """Return ``days`` consecutive calendar days beginning at ``start``.

    A non-positive length gives an empty axis.
    """
    return [start + timedelta(days=offset) for offset in range(max(days, 0))]


def project(axis: Sequence[date], leaves: Sequence[TaskNode]) -> list[BurndownPoint]:
    """Project ideal, actual and due remaining work over the axis.

    Only leaf nodes count. Anything with children that reaches this
    function is skipped so container fields can never leak into the sums.

    Args:
        axis: Ordered calendar days
        leaves: Tasks to aggregate, normally ``collect_leaves(forest)``

    Returns:
        One point per axis day, in axis order
    """
    tasks = [task for task in leaves if task.is_leaf()]
    total = sum(task.estimate for task in tasks)

    # A one-day axis has no slope; the ideal line is just the total.
    ideal_per_bucket = total / (len(axis) - 1) if len(axis) > 1 else 0.0

    points: list[BurndownPoint] = []
    for index, day in enumerate(axis):
        completed_sum = sum(
            task.estimate
            for task in tasks
            if task.completed_on_day is not None and task.completed_on_day <= day
        )
        due_sum = sum(
            task.estimate
            for task in tasks
            if task.due_on_day is not None and task.due_on_day <= day
        )

        points.append(
            BurndownPoint(
                date=day,
                ideal_remaining=round2(max(total - ideal_per_bucket * index, 0)),
                actual_remaining=round2(max(total - completed_sum, 0)),
                due_remaining=round2(max(total - due_sum, 0)),
            )
        )
    return points


def project_forest(axis: Sequence[date], forest: Forest) -> list[BurndownPoint]:
    """Project the burndown for every leaf in the forest."""
    return project(axis, collect_leaves(forest))


def summarize(forest: Forest, points: Sequence[BurndownPoint]) -> BurndownSummary:
    """Summarize a projected series against the forest it came from.

    ``remaining`` is the actual remaining work on the last axis day (the
    full total when the axis is empty).
    """
    total = round2(sum(task.estimate for task in collect_leaves(forest)))
    remaining = points[-1].actual_remaining if points else total
    return BurndownSummary(
        total_estimate=total,
        remaining=remaining,
        completed=round2(total - remaining),
        points=len(points),
    )
