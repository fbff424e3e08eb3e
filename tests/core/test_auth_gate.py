"""Auth Gate — header parsing and the 401/403 split."""

from datetime import datetime, timedelta, timezone

import pytest

from tasktracker.core.auth_gate import authenticate, extract_bearer_token
from tasktracker.core.domain_types import RequestContext
from tasktracker.core.errors import ForbiddenError, UnauthenticatedError
from tasktracker.core.tokens import TokenService


@pytest.fixture
def tokens():
    return TokenService("gate-secret-0123456789abcdef0123456789")


@pytest.mark.parametrize("header", [None, "", "   ", "Bearer", "Bearer   ", "Basic abc"])
def test_extract_returns_none_without_bearer_token(header):
    assert extract_bearer_token(header) is None


def test_extract_returns_token():
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"


def test_extract_scheme_is_case_insensitive():
    assert extract_bearer_token("bearer abc") == "abc"


def test_valid_token_yields_context(tokens):
    ctx = authenticate(f"Bearer {tokens.issue(9)}", tokens)
    assert ctx == RequestContext(user_id=9)


def test_missing_token_is_unauthenticated(tokens):
    with pytest.raises(UnauthenticatedError) as exc:
        authenticate(None, tokens)
    assert exc.value.http_status == 401


def test_invalid_token_is_forbidden(tokens):
    with pytest.raises(ForbiddenError) as exc:
        authenticate("Bearer garbage", tokens)
    assert exc.value.http_status == 403


def test_expired_token_is_forbidden(tokens):
    stale = tokens.issue(9, now=datetime.now(timezone.utc) - timedelta(days=30))
    with pytest.raises(ForbiddenError):
        authenticate(f"Bearer {stale}", tokens)
