"""Auth Gate — resolves an Authorization header into a RequestContext.

Invariants:
    - Pure function of the header and the signing key — no database access
    - No token present → UnauthenticatedError (401)
    - Token present but invalid/expired/malformed → ForbiddenError (403)
"""

import logging

from tasktracker.core.domain_types import RequestContext
from tasktracker.core.errors import ForbiddenError, InvalidTokenError, UnauthenticatedError
from tasktracker.core.tokens import TokenService

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from "Bearer <token>", or None when there is none."""
    if not authorization:
        return None
    parts = authorization.strip().split(None, 1)
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        return None
    token = parts[1].strip()
    return token or None


def authenticate(
    authorization: str | None, token_service: TokenService,
) -> RequestContext:
    token = extract_bearer_token(authorization)
    if token is None:
        raise UnauthenticatedError()
    try:
        user_id = token_service.verify(token)
    except InvalidTokenError as e:
        logger.info(f"Rejected bearer token: {e.reason}")
        raise ForbiddenError() from e
    return RequestContext(user_id=user_id)
