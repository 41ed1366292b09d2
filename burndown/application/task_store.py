"""Task store application service.

Owns the current forest and the burndown axis for the lifetime of a
process, applies commands by running the pure domain operations, persists
every committed forest and notifies subscribers.

Commands never raise for expected conditions. Validation problems come
back as ``Err``; a command aimed at an id that no longer exists is a
silent no-op reported as ``Ok(False)``.
"""

import logging
import math
import time
from collections.abc import Callable
from datetime import date
from typing import Any

from pydantic import TypeAdapter, ValidationError

from burndown.domain.shared import DomainEvent, Err, Ok, Result, flat_map
from burndown.domain.task import (
    DEFAULT_AXIS_DAYS,
    AxisChanged,
    BurndownPoint,
    BurndownSummary,
    Forest,
    TaskAdded,
    TaskDeleted,
    TaskNode,
    TaskUpdated,
    ancestor_chain,
    collect_ids,
    collect_leaves,
    delete_by_id,
    find_by_id,
    insert_child,
    max_id,
    project_forest,
    summarize,
    to_day,
    update_by_id,
)
from burndown.domain.types import DateAxis, RangeMode
from burndown.infrastructure.storage import TaskRepository

logger = logging.getLogger(__name__)

Subscriber = Callable[[Forest, DomainEvent], None]

_day_adapter = TypeAdapter(date | None)


class IdGenerator:
    """Time-based, strictly increasing task ids.

    Ids are milliseconds since the epoch, bumped past the last issued id
    when the clock has not moved on.
    """

    def __init__(self, seed: int = 0, now_ms: Callable[[], int] | None = None) -> None:
        self._last = seed
        self._now_ms = now_ms or (lambda: time.time_ns() // 1_000_000)

    def observe(self, task_id: int) -> None:
        """Make sure future ids are larger than ``task_id``."""
        self._last = max(self._last, task_id)

    def next_id(self) -> int:
        self._last = max(self._now_ms(), self._last + 1)
        return self._last


# =============================================================================
# Range Filters
# =============================================================================


def in_range(task: TaskNode, mode: RangeMode, today: date) -> bool:
    """Decide whether a leaf belongs in a side panel.

    - today: due exactly today
    - untilToday: overdue and still open, or due today
    - fromToday: due later and still open, or due today

    A task due today is always shown, completed or not. A task without a
    due date is never shown.
    """
    due = task.due_on_day
    if due is None:
        return False
    if due == today:
        return True
    if mode is RangeMode.UNTIL_TODAY:
        return due < today and not task.is_completed()
    if mode is RangeMode.FROM_TODAY:
        return due > today and not task.is_completed()
    return False


# =============================================================================
# Validation
# =============================================================================


def _check_name(name: str) -> Result[str, str]:
    if not name or not name.strip():
        return Err("Task name is required")
    return Ok(name.strip())


def _check_estimate(estimate: float) -> Result[float, str]:
    if isinstance(estimate, bool) or not isinstance(estimate, (int, float)):
        return Err(f"Estimate must be a number, got {estimate!r}")
    if not math.isfinite(estimate) or estimate <= 0:
        return Err(f"Estimate must be greater than zero, got {estimate}")
    return Ok(float(estimate))


def _check_day(day: Any) -> Result[date | None, str]:
    try:
        return Ok(_day_adapter.validate_python(to_day(day)))
    except (ValidationError, ValueError):
        return Err(f"Not a calendar day: {day!r}")


def _check_due(due_on_day: Any) -> Result[date, str]:
    if due_on_day is None:
        return Err("A due date is required to add a task")
    return _check_day(due_on_day)


def _check_days(days: int) -> Result[int, str]:
    if days < 1:
        return Err(f"Axis length must be at least 1 day, got {days}")
    return Ok(days)


class TaskStore:
    """Process-wide holder of the task forest.

    Construct one per process and hand it to whatever needs task data.

    Example:
        store = TaskStore(repository=TaskRepository(path))
        store.subscribe(lambda forest, event: redraw(store.burndown()))
        store.add_leaf("Write docs", 3, None, date(2025, 9, 17))

    Attributes:
        version: Incremented once per committed change.
    """

    def __init__(
        self,
        forest: Forest | None = None,
        axis: DateAxis | None = None,
        repository: TaskRepository | None = None,
        clock: Callable[[], date] = date.today,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self._forest: Forest = list(forest or [])
        self._clock = clock
        self._axis = axis or DateAxis(start=clock(), days=DEFAULT_AXIS_DAYS)
        self._repository = repository
        self._ids = id_generator or IdGenerator()
        self._ids.observe(max_id(self._forest))
        self._subscribers: list[Subscriber] = []
        self.version = 0

    # -------------------- observers --------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call ``callback(forest, event)`` after every committed change.

        A callback that raises is logged and skipped; the command that
        triggered it still succeeds and later callbacks still run.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # -------------------- reads --------------------

    def today(self) -> date:
        return self._clock()

    def get_forest(self) -> Forest:
        return self._forest

    def find(self, task_id: int) -> TaskNode | None:
        return find_by_id(self._forest, task_id)

    def leaves(self) -> list[TaskNode]:
        return collect_leaves(self._forest)

    def axis(self) -> DateAxis:
        return self._axis

    def axis_dates(self) -> list[date]:
        return self._axis.dates()

    def breadcrumb(self, task_id: int) -> list[str]:
        """Ancestor names for a task, outermost first."""
        return ancestor_chain(self._forest, task_id)

    def tasks_in_range(self, mode: RangeMode | str) -> list[TaskNode]:
        """Leaves for the today / until-today / from-today panels."""
        mode = RangeMode(mode)
        today = self.today()
        return [task for task in self.leaves() if in_range(task, mode, today)]

    def todays_tasks(self) -> list[TaskNode]:
        """Leaves due exactly today."""
        return self.tasks_in_range(RangeMode.TODAY)

    def burndown(self) -> list[BurndownPoint]:
        """Project the burndown series for the current forest and axis."""
        return project_forest(self.axis_dates(), self._forest)

    def summary(self) -> BurndownSummary:
        return summarize(self._forest, self.burndown())

    # -------------------- commands --------------------

    def add_leaf(
        self,
        name: str,
        estimate: float,
        parent_id: int | None,
        due_on_day: date | None,
    ) -> Result[TaskNode, str]:
        """Create a leaf task under ``parent_id`` (None for a new root).

        Returns:
            Ok(node) with the stored task, or Err(str) when the name is
            blank, the estimate is not positive, the due date is missing or
            the parent does not exist. Nothing changes on Err.
        """
        checked = flat_map(_check_name(name), lambda _: _check_estimate(estimate))
        checked = flat_map(checked, lambda _: _check_due(due_on_day))
        if isinstance(checked, Err):
            logger.info(f"Add rejected: {checked.error}")
            return checked

        if parent_id is not None and find_by_id(self._forest, parent_id) is None:
            logger.info(f"Add rejected: parent task {parent_id} not found")
            return Err(f"Parent task {parent_id} not found")

        node = TaskNode(
            id=self._ids.next_id(),
            name=name.strip(),
            estimate=float(estimate),
            parent_id=parent_id,
            due_on_day=checked.value,
        )
        self._commit(
            insert_child(self._forest, parent_id, node),
            TaskAdded(task_id=node.id, parent_id=parent_id, task_name=node.name),
        )
        logger.info(f"Added task {node.id} '{node.name}' under {parent_id}")
        return Ok(node)

    def update_estimate(self, task_id: int, estimate: float) -> Result[bool, str]:
        """Set a task's estimate. Err for a non-positive estimate."""
        checked = _check_estimate(estimate)
        if isinstance(checked, Err):
            return checked
        return self._apply_update(task_id, {"estimate": checked.value})

    def update_due_on_day(self, task_id: int, day: date | str | None) -> Result[bool, str]:
        """Set or clear a task's due date. Err for a value that is not a day."""
        return self._apply_day(task_id, "due_on_day", day)

    def update_completed_on_day(self, task_id: int, day: date | str | None) -> Result[bool, str]:
        """Set or clear a task's completion date. Err for a value that is not a day."""
        return self._apply_day(task_id, "completed_on_day", day)

    def toggle_completed(self, task_id: int) -> Result[bool, str]:
        """Mark a task completed today, or reopen it if already completed."""
        task = self.find(task_id)
        if task is None:
            logger.debug(f"Task {task_id} not found; toggle ignored")
            return Ok(False)
        return self.update_completed_on_day(task_id, None if task.is_completed() else self.today())

    def delete_task(self, task_id: int) -> Result[bool, str]:
        """Remove a task together with its subtree."""
        task = self.find(task_id)
        if task is None:
            logger.debug(f"Task {task_id} not found; delete ignored")
            return Ok(False)

        removed = collect_ids([task])
        self._commit(
            delete_by_id(self._forest, task_id),
            TaskDeleted(task_id=task_id, task_name=task.name, removed_ids=removed),
        )
        logger.info(f"Deleted task {task_id} and {len(removed) - 1} descendant(s)")
        return Ok(True)

    def set_axis(self, start: date | None = None, days: int | None = None) -> Result[DateAxis, str]:
        """Reconfigure the burndown date range.

        Args:
            start: First axis day; None keeps the current start.
            days: Axis length; None keeps the current length.

        Returns:
            Ok(axis) with the new axis, or Err(str) for a length below one.
        """
        checked = _check_days(self._axis.days if days is None else days)
        if isinstance(checked, Err):
            return checked

        axis = DateAxis(start=to_day(start) if start else self._axis.start, days=checked.value)
        if axis != self._axis:
            self._axis = axis
            self.version += 1
            self._notify(AxisChanged(start=axis.start, days=axis.days))
        return Ok(axis)

    # -------------------- internals --------------------

    def _apply_day(self, task_id: int, field: str, day: Any) -> Result[bool, str]:
        checked = _check_day(day)
        if isinstance(checked, Err):
            return checked
        return self._apply_update(task_id, {field: checked.value})

    def _apply_update(self, task_id: int, patch: dict) -> Result[bool, str]:
        new_forest = update_by_id(self._forest, task_id, patch)
        if new_forest is self._forest:
            logger.debug(f"Task {task_id} not found; update ignored")
            return Ok(False)

        self._commit(new_forest, TaskUpdated(task_id=task_id, changes=patch))
        logger.info(f"Updated task {task_id}: {patch}")
        return Ok(True)

    def _commit(self, forest: Forest, event: DomainEvent) -> None:
        self._forest = forest
        self.version += 1
        if self._repository is not None:
            saved = self._repository.save(forest)
            if isinstance(saved, Err):
                logger.error(f"Failed to save tasks: {saved.error}")
        self._notify(event)

    def _notify(self, event: DomainEvent) -> None:
        for callback in list(self._subscribers):
            try:
                callback(self._forest, event)
            except Exception:
                # already committed and saved
                logger.exception(f"Subscriber {callback!r} failed on {type(event).__name__}")


def open_store(
    repository: TaskRepository,
    axis: DateAxis | None = None,
    clock: Callable[[], date] = date.today,
) -> TaskStore:
    """Build a store from the persisted snapshot.

    A snapshot that cannot be read or parsed is logged, moved aside to
    ``tasks.json.corrupt-<timestamp>`` and replaced by an empty forest.
    """
    loaded = repository.load()
    if isinstance(loaded, Err):
        logger.warning(f"Could not load tasks from {repository.path}, starting empty: {loaded.error}")
        moved = repository.quarantine()
        if isinstance(moved, Err):
            logger.error(f"Unreadable snapshot left in place and will be overwritten: {moved.error}")
        else:
            logger.warning(f"Unreadable snapshot kept at {moved.value}")
        forest: Forest = []
    else:
        forest = loaded.value
    return TaskStore(forest=forest, axis=axis, repository=repository, clock=clock)
