"""Credential Store — persists users and owns the only copy of password hashes.

Invariants:
    - Emails are lower-cased before every insert and lookup
    - create() hashes the password before the row exists; plaintext is never stored
    - create() and find_by_id() return UserRecord (no hash); find_by_email() returns the ORM row
    - Duplicate email surfaces as DuplicateEmailError, both from the pre-check and
      from the unique constraint (concurrent registrations)

Design Decisions:
    - bcrypt runs in a worker thread: the hash is deliberately slow and would
      otherwise stall the event loop for every in-flight request
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tasktracker.core.errors import DuplicateEmailError
from tasktracker.core.passwords import PasswordHasher
from tasktracker.models.user import User
from tasktracker.schemas.auth import RegisterRequest, UserRecord

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CredentialStore:
    """User persistence scoped to one database session."""

    def __init__(self, db: AsyncSession, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    async def create(self, fields: RegisterRequest) -> UserRecord:
        email = normalize_email(fields.email)
        if await self.find_by_email(email) is not None:
            raise DuplicateEmailError()

        password_hash = await asyncio.to_thread(self.hasher.hash, fields.password)
        user = User(
            first_name=fields.first_name,
            middle_name=fields.middle_name or None,
            last_name=fields.last_name,
            email=email,
            password_hash=password_hash,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info("Registration lost a duplicate-email race")
            raise DuplicateEmailError()
        await self.db.refresh(user)
        logger.info("User registered", extra={"user_id": user.id})
        return UserRecord.model_validate(user)

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email)),
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: int) -> UserRecord | None:
        result = await self.db.execute(
            select(User).where(User.id == user_id),
        )
        user = result.scalar_one_or_none()
        return UserRecord.model_validate(user) if user else None

    async def verify_password(self, user: User, plaintext: str) -> bool:
        return await asyncio.to_thread(
            self.hasher.verify, plaintext, user.password_hash,
        )
