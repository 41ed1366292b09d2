"""Domain value objects for the burndown tracker.

Immutable value objects for the date axis and the side-panel range modes.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum


class RangeMode(str, Enum):
    """Which due-dated leaves a side panel shows relative to today."""

    TODAY = "today"
    UNTIL_TODAY = "untilToday"
    FROM_TODAY = "fromToday"


@dataclass(frozen=True)
class DateAxis:
    """The run of calendar days a burndown is computed over.

    Represents the configured sprint window as a start day plus a length,
    and expands it to the concrete dates on demand.

    Example:
        axis = DateAxis(start=date(2025, 9, 15), days=5)
        axis.dates()[-1]  # date(2025, 9, 19)
        axis.end          # date(2025, 9, 19)

    Attributes:
        start: First day of the axis
        days: Number of consecutive days, at least one
    """

    start: date
    days: int

    def __post_init__(self) -> None:
        if self.days < 1:
            raise ValueError(f"Date axis needs at least one day, got {self.days}")

    def dates(self) -> list[date]:
        """Return every day on the axis in order."""
        return [self.start + timedelta(days=offset) for offset in range(self.days)]

    @property
    def end(self) -> date:
        """Last day on the axis."""
        return self.start + timedelta(days=self.days - 1)

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} .. {self.end.isoformat()} ({self.days} days)"
