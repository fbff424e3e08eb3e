"""Task Routes — authenticated CRUD over the caller's own tasks.

Invariants:
    - Every handler depends on require_auth; owner id comes from RequestContext only
    - Store returning None/False maps to 404 (missing and foreign look the same)
    - Listing pagination block: {page, limit, total, totalPages}
    - task_id and page are bounded to the INTEGER range; out-of-range values are 400
"""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, Path, Query, status

from tasktracker.api.dependencies import get_task_store, require_auth
from tasktracker.core.domain_types import RequestContext, SortField, SortOrder
from tasktracker.core.errors import NotFoundOrUnauthorizedError
from tasktracker.core.task_query import (
    DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, MAX_PAGE, MAX_TASK_ID, TaskListQuery,
    total_pages,
)
from tasktracker.schemas.task import (
    Pagination, TaskCreate, TaskListResponse, TaskResponse, TaskUpdate,
)
from tasktracker.services.task_store import TaskStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    page: int = Query(DEFAULT_PAGE, ge=1, le=MAX_PAGE),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    sort_by: Literal["end_date", "priority"] | None = Query(None, alias="sortBy"),
    sort_order: Literal["asc", "desc"] | None = Query(None, alias="sortOrder"),
    ctx: RequestContext = Depends(require_auth),
    store: TaskStore = Depends(get_task_store),
):
    """List the caller's tasks with offset pagination and optional sorting."""
    query = TaskListQuery(
        page=page,
        limit=limit,
        sort_by=SortField(sort_by) if sort_by else None,
        sort_order=SortOrder(sort_order) if sort_order else None,
    )
    result = await store.list(ctx.user_id, query)
    return TaskListResponse(
        tasks=[TaskResponse.model_validate(t) for t in result.items],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=result.total,
            totalPages=total_pages(result.total, limit),
        ),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(
    body: TaskCreate,
    ctx: RequestContext = Depends(require_auth),
    store: TaskStore = Depends(get_task_store),
):
    task = await store.create(ctx.user_id, body)
    return {
        "message": "Task created successfully",
        "task": TaskResponse.model_validate(task).model_dump(mode="json"),
    }


@router.get("/{task_id}")
async def get_task(
    task_id: int = Path(ge=1, le=MAX_TASK_ID),
    ctx: RequestContext = Depends(require_auth),
    store: TaskStore = Depends(get_task_store),
):
    task = await store.find_by_id(task_id, ctx.user_id)
    if task is None:
        raise NotFoundOrUnauthorizedError(task_id, "view")
    return {"task": TaskResponse.model_validate(task).model_dump(mode="json")}


@router.put("/{task_id}")
async def update_task(
    body: TaskUpdate,
    task_id: int = Path(ge=1, le=MAX_TASK_ID),
    ctx: RequestContext = Depends(require_auth),
    store: TaskStore = Depends(get_task_store),
):
    """Apply a partial update; omitted fields keep their current values."""
    task = await store.update(task_id, ctx.user_id, body.changes())
    if task is None:
        raise NotFoundOrUnauthorizedError(task_id, "update")
    return {
        "message": "Task updated successfully",
        "task": TaskResponse.model_validate(task).model_dump(mode="json"),
    }


@router.delete("/{task_id}")
async def delete_task(
    task_id: int = Path(ge=1, le=MAX_TASK_ID),
    ctx: RequestContext = Depends(require_auth),
    store: TaskStore = Depends(get_task_store),
):
    if not await store.delete(task_id, ctx.user_id):
        raise NotFoundOrUnauthorizedError(task_id, "delete")
    return {"message": "Task deleted successfully"}
