"""Task Schemas — Pydantic models for task create/update/list payloads.

Invariants:
    - title: stripped first, then 1-255 chars; may be omitted on update but never null or blank
    - priority: low | medium | high; omitted on create → medium; never null on update
    - end_date: ISO 8601 date (datetime strings keep their date part); null clears it
    - description: empty string normalized to null
    - TaskUpdate distinguishes omitted fields from explicit nulls (model_fields_set)

Design Decisions:
    - Partial update carried as a dict from model_dump(exclude_unset=True): the store
      applies exactly the keys the client sent
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from tasktracker.core.domain_types import Priority
from tasktracker.core.task_query import parse_end_date


def _strip_title(v):
    return v.strip() if isinstance(v, str) else v


class TaskCreate(BaseModel):
    """Task creation payload."""
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    priority: Priority = Priority.MEDIUM
    end_date: date | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return _strip_title(v)

    @field_validator("description")
    @classmethod
    def empty_description_is_null(cls, v: str | None) -> str | None:
        return v or None

    @field_validator("end_date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return parse_end_date(v)


class TaskUpdate(BaseModel):
    """Partial task update — every field optional, only sent fields change."""
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    priority: Priority | None = None
    end_date: date | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return _strip_title(v)

    @field_validator("description")
    @classmethod
    def empty_description_is_null(cls, v: str | None) -> str | None:
        return v or None

    @field_validator("end_date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return parse_end_date(v)

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "TaskUpdate":
        for name in ("title", "priority"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: str | None = None
    priority: Priority
    end_date: date | None = None
    created_at: datetime
    updated_at: datetime


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class TaskListResponse(BaseModel):
    tasks: list[TaskResponse]
    pagination: Pagination
