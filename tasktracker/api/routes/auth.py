"""Auth Routes — registration and login, the only unauthenticated write endpoints.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler
    - Responses carry {message, token, user}; user never includes the hash
"""

import logging

from fastapi import APIRouter, Depends, status

from tasktracker.api.dependencies import get_credential_store, get_token_service
from tasktracker.core.tokens import TokenService
from tasktracker.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from tasktracker.services.auth_service import login_user, register_user
from tasktracker.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["auth"])


@router.post(
    "/register", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    store: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    """Create an account and return a bearer token for it."""
    token, user = await register_user(store, tokens, body)
    return AuthResponse(
        message="User registered successfully", token=token, user=user,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    store: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    token, user = await login_user(store, tokens, body)
    return AuthResponse(message="Login successful", token=token, user=user)
