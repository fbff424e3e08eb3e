"""Task Store — ownership-scoped CRUD, ordering and offset pagination for tasks.

Invariants:
    - Every query carries `Task.user_id == owner_id`; owner_id comes from the auth
      context, never from the request body
    - Foreign and missing tasks are indistinguishable: None / False
    - update() applies only the keys it is given; no keys → no write
    - Priority ordering uses a CASE rank (high=1, medium=2, low=3), not the
      lexical order of the enum values
    - NULL end dates sort last in both directions
    - total counts every task the owner has, independent of the page

Design Decisions:
    - Ownership checked with a read before writing; a row that disappears between
      check and write is reported as not found (StaleDataError / rowcount 0)
    - Ties broken by created_at DESC, id DESC so pages never overlap
"""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import case, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from tasktracker.core.domain_types import Priority, SortField, SortOrder
from tasktracker.core.errors import ValidationError
from tasktracker.core.task_query import (
    DEFAULT_RANK, PRIORITY_RANK, TaskListQuery, parse_end_date, resolve_sort_order,
)
from tasktracker.models.task import Task
from tasktracker.schemas.task import TaskCreate

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "priority", "end_date")


@dataclass
class TaskPage:
    items: list[Task]
    total: int


def _priority_rank_expr():
    return case(
        dict(PRIORITY_RANK), value=Task.priority, else_=DEFAULT_RANK,
    )


def build_order_by(query: TaskListQuery) -> list:
    """ORDER BY clauses for a listing request."""
    tiebreak = [Task.created_at.desc(), Task.id.desc()]
    if query.sort_by is None:
        return tiebreak

    descending = resolve_sort_order(query.sort_order) is SortOrder.DESC
    if query.sort_by is SortField.END_DATE:
        column = Task.end_date.desc() if descending else Task.end_date.asc()
        return [Task.end_date.is_(None), column, *tiebreak]

    rank = _priority_rank_expr()
    return [rank.desc() if descending else rank.asc(), *tiebreak]


def _coerce_change(name: str, value: Any) -> Any:
    try:
        return _coerce_value(name, value)
    except ValueError as e:
        raise ValidationError(
            f"Invalid value for {name}", details=[{"field": name, "message": str(e)}],
        )


def _coerce_value(name: str, value: Any) -> Any:
    if name == "title":
        if value is None or not str(value).strip():
            raise ValueError("title cannot be empty")
        return str(value).strip()
    if name == "description":
        return value or None
    if name == "priority":
        return Priority(value)
    return parse_end_date(value)


class TaskStore:
    """Task persistence scoped to one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, owner_id: int, data: TaskCreate) -> Task:
        task = Task(
            user_id=owner_id,
            title=data.title,
            description=data.description or None,
            priority=data.priority or Priority.MEDIUM,
            end_date=parse_end_date(data.end_date),
        )
        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task)
        logger.info(
            "Task created", extra={"user_id": owner_id, "task_id": task.id},
        )
        return task

    async def list(self, owner_id: int, query: TaskListQuery | None = None) -> TaskPage:
        query = query or TaskListQuery()
        items_result = await self.db.execute(
            select(Task)
            .where(Task.user_id == owner_id)
            .order_by(*build_order_by(query))
            .limit(query.limit)
            .offset(query.offset),
        )
        total_result = await self.db.execute(
            select(func.count()).select_from(Task).where(Task.user_id == owner_id),
        )
        return TaskPage(
            items=list(items_result.scalars().all()),
            total=total_result.scalar_one(),
        )

    async def find_by_id(self, task_id: int, owner_id: int) -> Task | None:
        result = await self.db.execute(
            select(Task).where(Task.id == task_id, Task.user_id == owner_id),
        )
        return result.scalar_one_or_none()

    async def update(
        self, task_id: int, owner_id: int, changes: dict[str, Any],
    ) -> Task | None:
        task = await self.find_by_id(task_id, owner_id)
        if task is None:
            return None

        applicable = {
            name: _coerce_change(name, value)
            for name, value in changes.items() if name in UPDATABLE_FIELDS
        }
        if not applicable:
            return task

        for name, value in applicable.items():
            setattr(task, name, value)
        try:
            await self.db.commit()
        except StaleDataError:
            await self.db.rollback()
            logger.info(
                "Task vanished before update",
                extra={"user_id": owner_id, "task_id": task_id},
            )
            return None
        await self.db.refresh(task)
        logger.info(
            "Task updated", extra={"user_id": owner_id, "task_id": task_id},
        )
        return task

    async def delete(self, task_id: int, owner_id: int) -> bool:
        if await self.find_by_id(task_id, owner_id) is None:
            return False
        result = await self.db.execute(
            delete(Task).where(Task.id == task_id, Task.user_id == owner_id),
        )
        await self.db.commit()
        deleted = result.rowcount > 0
        if deleted:
            logger.info(
                "Task deleted", extra={"user_id": owner_id, "task_id": task_id},
            )
        return deleted
