"""Auth Service — registration and login orchestration on top of the credential store.

Invariants:
    - Unknown email and wrong password raise the same InvalidCredentialsError
    - A token is only issued after the user row is committed / the password verified
"""

import logging

from tasktracker.core.errors import InvalidCredentialsError
from tasktracker.core.tokens import TokenService
from tasktracker.schemas.auth import LoginRequest, RegisterRequest, UserPublic
from tasktracker.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


async def register_user(
    store: CredentialStore, tokens: TokenService, payload: RegisterRequest,
) -> tuple[str, UserPublic]:
    user = await store.create(payload)
    return tokens.issue(user.id), user.public()


async def login_user(
    store: CredentialStore, tokens: TokenService, payload: LoginRequest,
) -> tuple[str, UserPublic]:
    user = await store.find_by_email(payload.email)
    if user is None or not await store.verify_password(user, payload.password):
        logger.info("Login rejected")
        raise InvalidCredentialsError()
    logger.info("Login succeeded", extra={"user_id": user.id})
    return tokens.issue(user.id), UserPublic.model_validate(user)
