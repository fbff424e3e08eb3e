"""Token Service — issues and verifies signed, time-limited bearer tokens.

Invariants:
    - Payload is {"userId": int, "iat": ..., "exp": ...}, signed HS256
    - verify() returns the embedded user id or raises InvalidTokenError
    - A missing signing secret raises ConfigurationError, never a per-request 403

Design Decisions:
    - PyJWT over hand-rolled HMAC: exp/iat validation and algorithm pinning for free
    - TTL expressed as a duration string ("7d", "12h") to match deployment env vars
"""

import re
from datetime import datetime, timedelta, timezone

import jwt

from tasktracker.core.domain_types import UserId
from tasktracker.core.errors import ConfigurationError, InvalidTokenError

JWT_ALGORITHM = "HS256"
USER_ID_CLAIM = "userId"
DEFAULT_TTL = timedelta(days=7)

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_UNIT_SECONDS = {
    "": 1, "s": 1, "m": 60, "h": 3600, "d": 86_400, "w": 604_800,
}


def parse_duration(value: str) -> timedelta:
    """Parse "7d", "12h", "30m", "45s", "2w" or bare seconds into a timedelta."""
    match = _DURATION_RE.match(value or "")
    if not match:
        raise ConfigurationError(
            "jwt_expires_in", f"unrecognised duration {value!r}",
        )
    amount, unit = match.groups()
    seconds = int(amount) * _UNIT_SECONDS[unit.lower()]
    if seconds <= 0:
        raise ConfigurationError("jwt_expires_in", "duration must be positive")
    return timedelta(seconds=seconds)


class TokenService:
    """Signs and verifies user bearer tokens with a process-wide secret."""

    def __init__(self, secret: str | None, ttl: timedelta = DEFAULT_TTL):
        self._secret = secret
        self.ttl = ttl
        self._require_secret()

    @classmethod
    def from_settings(cls, settings) -> "TokenService":
        return cls(settings.jwt_secret, parse_duration(settings.jwt_expires_in))

    def _require_secret(self) -> str:
        if not self._secret:
            raise ConfigurationError("jwt_secret", "JWT secret not configured")
        return self._secret

    def issue(self, user_id: int, now: datetime | None = None) -> str:
        secret = self._require_secret()
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            USER_ID_CLAIM: int(user_id),
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> UserId:
        secret = self._require_secret()
        try:
            payload = jwt.decode(
                token, secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError("expired")
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"malformed: {type(e).__name__}")

        user_id = payload.get(USER_ID_CLAIM)
        # bool is an int subclass; reject it explicitly
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidTokenError("missing userId claim")
        return UserId(user_id)
