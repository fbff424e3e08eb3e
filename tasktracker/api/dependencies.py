"""Route Dependencies — per-request stores, token service and the auth gate.

Invariants:
    - Stores are built per request around the request's AsyncSession
    - require_auth is the only way a handler learns the caller's user id
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from tasktracker.config import Settings, get_settings
from tasktracker.core.auth_gate import authenticate
from tasktracker.core.domain_types import RequestContext
from tasktracker.core.passwords import PasswordHasher
from tasktracker.core.tokens import TokenService
from tasktracker.infrastructure.database import get_db
from tasktracker.services.credential_store import CredentialStore
from tasktracker.services.task_store import TaskStore


def get_token_service(
    settings: Settings = Depends(get_settings),
) -> TokenService:
    return TokenService.from_settings(settings)


def get_credential_store(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CredentialStore:
    return CredentialStore(db, PasswordHasher(settings.bcrypt_rounds))


def get_task_store(db: AsyncSession = Depends(get_db)) -> TaskStore:
    return TaskStore(db)


def require_auth(
    authorization: str | None = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> RequestContext:
    """Auth gate — 401 without a bearer token, 403 for a bad one."""
    return authenticate(authorization, tokens)
