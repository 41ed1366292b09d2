"""Shared fixtures for the burndown test suite."""

from datetime import date

import pytest

from burndown.application import IdGenerator, TaskStore
from burndown.domain.task import TaskNode
from burndown.domain.types import DateAxis
from burndown.infrastructure.storage import TaskRepository

TODAY = date(2025, 9, 17)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def sample_forest() -> list[TaskNode]:
    """Two roots, three levels deep.

    Release (1) and Backend (2) are containers that still carry stale
    estimates and dates; they must never show up in aggregates.

        Release #1
          Backend #2
            API #3     3pt due 09-16 done 09-16
            DB #4      5pt due 09-17
          Docs #5      2pt due 09-19
        Chores #6      1pt no due date
    """
    api = TaskNode(
        id=3,
        name="API",
        estimate=3,
        parent_id=2,
        due_on_day=date(2025, 9, 16),
        completed_on_day=date(2025, 9, 16),
    )
    db = TaskNode(id=4, name="DB", estimate=5, parent_id=2, due_on_day=date(2025, 9, 17))
    backend = TaskNode(id=2, name="Backend", estimate=40, parent_id=1, children=[api, db])
    docs = TaskNode(id=5, name="Docs", estimate=2, parent_id=1, due_on_day=date(2025, 9, 19))
    release = TaskNode(
        id=1,
        name="Release",
        estimate=100,
        due_on_day=date(2025, 9, 15),
        completed_on_day=date(2025, 9, 15),
        children=[backend, docs],
    )
    chores = TaskNode(id=6, name="Chores", estimate=1)
    return [release, chores]


@pytest.fixture
def axis() -> DateAxis:
    return DateAxis(start=date(2025, 9, 15), days=5)


@pytest.fixture
def store(sample_forest, axis) -> TaskStore:
    """In-memory store over the sample forest with a fixed clock."""
    return TaskStore(
        forest=sample_forest,
        axis=axis,
        clock=lambda: TODAY,
        id_generator=IdGenerator(now_ms=lambda: 1000),
    )


@pytest.fixture
def repository(tmp_path) -> TaskRepository:
    return TaskRepository(tmp_path / "tasks.json")
