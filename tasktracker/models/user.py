"""User ORM — persists account credentials and profile names.

Invariants:
    - id is an integer primary key, assigned by the database
    - email is unique and stored lower-cased (CredentialStore normalizes before insert)
    - password_hash never leaves the credential store (UserPublic omits it)

Design Decisions:
    - No update/delete flow for users; tasks cascade on the FK for manual cleanup
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from tasktracker.db.base import Base


class User(Base):
    """Registered account — owns tasks."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
