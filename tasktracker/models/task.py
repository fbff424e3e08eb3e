"""Task ORM — a user's to-do item with priority and optional due date.

Invariants:
    - user_id is the owner; set at creation, never reassigned
    - priority is one of low/medium/high (DB enum task_priority), default medium
    - end_date is a calendar DATE, no time component
    - updated_at changes on every UPDATE issued through the ORM

Design Decisions:
    - Enum stores the lower-case values (values_callable) so raw SQL and API agree
    - Index on user_id: every query is owner-scoped
"""

from datetime import date, datetime, timezone

from sqlalchemy import Enum, String, Text, Integer, Date, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from tasktracker.core.domain_types import Priority
from tasktracker.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(Base):
    """Task row — always accessed through an ownership predicate."""
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[Priority] = mapped_column(
        Enum(
            Priority, name="task_priority",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=Priority.MEDIUM,
    )
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
