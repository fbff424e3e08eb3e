"""Auth Schemas — Pydantic models with field-level validation for register/login.

Invariants:
    - first_name/last_name: 1-255 chars, letters only, stripped
    - middle_name: optional, letters only, empty string treated as absent
    - email: stripped and lower-cased, then checked as an address by EmailStr
    - password (register): >= 6 chars with an upper-case letter, a lower-case letter and a digit
    - UserPublic and UserRecord never carry the password hash
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

NAME_RE = re.compile(r"^[a-zA-Z]+$")


def _lower_email(v):
    return v.strip().lower() if isinstance(v, str) else v


class RegisterRequest(BaseModel):
    """Account registration payload."""
    first_name: str = Field(min_length=1, max_length=255)
    middle_name: str | None = Field(None, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=1024)

    @field_validator("first_name", "last_name")
    @classmethod
    def check_required_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        if not NAME_RE.match(v):
            raise ValueError("name can only contain letters")
        return v

    @field_validator("middle_name")
    @classmethod
    def check_middle_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        if not NAME_RE.match(v):
            raise ValueError("Middle name can only contain letters")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _lower_email(v)

    @field_validator("password")
    @classmethod
    def check_password_complexity(cls, v: str) -> str:
        has_upper = any(c.isupper() for c in v)
        has_lower = any(c.islower() for c in v)
        has_digit = any(c.isdigit() for c in v)
        if not (has_upper and has_lower and has_digit):
            raise ValueError(
                "Password must contain at least one uppercase letter, "
                "one lowercase letter, and one number",
            )
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=1024)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _lower_email(v)


class UserPublic(BaseModel):
    """User data safe to return to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    middle_name: str | None = None
    last_name: str
    email: str


class UserRecord(UserPublic):
    """Stored user minus the hash, as returned by the credential store."""
    created_at: datetime

    def public(self) -> UserPublic:
        return UserPublic(**self.model_dump(exclude={"created_at"}))


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserPublic
