"""FastAPI routes for the burndown tracker.

The app wraps a single TaskStore passed to ``create_app``; every route
reads it from ``app.state`` so tests and the server share one code path.
"""

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from burndown import __version__
from burndown.application import TaskStore
from burndown.domain.shared import Err, Result
from burndown.domain.task import BurndownPoint, TaskNode, format_breadcrumb
from burndown.domain.types import RangeMode
from burndown.interfaces.api.schemas import (
    AddTaskRequest,
    AxisResponse,
    BreadcrumbResponse,
    BurndownResponse,
    ChangeResponse,
    RangeTaskResponse,
    UpdateAxisRequest,
    UpdateDayRequest,
    UpdateEstimateRequest,
)

router = APIRouter(prefix="/api")


def get_store(request: Request) -> TaskStore:
    return request.app.state.store


def _change(result: Result[bool, str]) -> ChangeResponse:
    if isinstance(result, Err):
        raise HTTPException(status_code=400, detail=result.error)
    return ChangeResponse(changed=result.value)


# =============================================================================
# Tasks
# =============================================================================


@router.get("/tasks", response_model=list[TaskNode])
def list_tasks(store: TaskStore = Depends(get_store)):
    """Return the whole forest."""
    return store.get_forest()


@router.post("/tasks", response_model=TaskNode, status_code=201)
def add_task(req: AddTaskRequest, store: TaskStore = Depends(get_store)):
    """Add a leaf task."""
    result = store.add_leaf(req.name, req.estimate, req.parent_id, req.due_on_day)
    if isinstance(result, Err):
        raise HTTPException(status_code=400, detail=result.error)
    return result.value


@router.get("/tasks/{task_id}", response_model=TaskNode)
def get_task(task_id: int, store: TaskStore = Depends(get_store)):
    task = store.find(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.patch("/tasks/{task_id}/estimate", response_model=ChangeResponse)
def update_estimate(task_id: int, req: UpdateEstimateRequest, store: TaskStore = Depends(get_store)):
    return _change(store.update_estimate(task_id, req.estimate))


@router.patch("/tasks/{task_id}/due", response_model=ChangeResponse)
def update_due(task_id: int, req: UpdateDayRequest, store: TaskStore = Depends(get_store)):
    return _change(store.update_due_on_day(task_id, req.day))


@router.patch("/tasks/{task_id}/completed", response_model=ChangeResponse)
def update_completed(task_id: int, req: UpdateDayRequest, store: TaskStore = Depends(get_store)):
    return _change(store.update_completed_on_day(task_id, req.day))


@router.post("/tasks/{task_id}/toggle", response_model=ChangeResponse)
def toggle_completed(task_id: int, store: TaskStore = Depends(get_store)):
    """Flip completion between today and open."""
    return _change(store.toggle_completed(task_id))


@router.delete("/tasks/{task_id}", response_model=ChangeResponse)
def delete_task(task_id: int, store: TaskStore = Depends(get_store)):
    """Delete a task and its subtree."""
    return _change(store.delete_task(task_id))


@router.get("/tasks/{task_id}/breadcrumb", response_model=BreadcrumbResponse)
def breadcrumb(task_id: int, store: TaskStore = Depends(get_store)):
    names = store.breadcrumb(task_id)
    return BreadcrumbResponse(names=names, label=format_breadcrumb(names))


@router.get("/range", response_model=list[RangeTaskResponse])
def tasks_in_range(mode: RangeMode = RangeMode.TODAY, store: TaskStore = Depends(get_store)):
    """Leaves for the today / until-today / from-today panels."""
    return [
        RangeTaskResponse(task=task, breadcrumb=store.breadcrumb(task.id))
        for task in store.tasks_in_range(mode)
    ]


# =============================================================================
# Burndown
# =============================================================================


@router.get("/burndown", response_model=BurndownResponse)
def burndown(store: TaskStore = Depends(get_store)):
    """Burndown series, summary and the axis they cover."""
    points: list[BurndownPoint] = store.burndown()
    return BurndownResponse(
        axis=AxisResponse.from_axis(store.axis()),
        points=points,
        summary=store.summary(),
    )


@router.get("/axis", response_model=AxisResponse)
def get_axis(store: TaskStore = Depends(get_store)):
    return AxisResponse.from_axis(store.axis())


@router.put("/axis", response_model=AxisResponse)
def update_axis(req: UpdateAxisRequest, store: TaskStore = Depends(get_store)):
    result = store.set_axis(req.start, req.days)
    if isinstance(result, Err):
        raise HTTPException(status_code=400, detail=result.error)
    return AxisResponse.from_axis(result.value)


# =============================================================================
# App
# =============================================================================


def create_app(store: TaskStore) -> FastAPI:
    """Create the FastAPI application around a store."""
    app = FastAPI(
        title="Burndown",
        description="Hierarchical sprint tasks with a burndown chart",
        version=__version__,
    )
    app.state.store = store

    # CORS for a local frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/")
    def root():
        return {"name": "Burndown", "version": __version__}

    return app
