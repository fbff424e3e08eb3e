"""Error Hierarchy — typed, categorized exceptions for all task tracker failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TaskTrackerError base: FastAPI global handler catches all
    - Unknown email and wrong password share InvalidCredentialsError (no account enumeration)
    - Foreign and missing tasks share NotFoundOrUnauthorizedError (no existence leakage)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    CONFIGURATION = "configuration"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context carried alongside an error for logs, never for clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    task_id: int | None = None
    debug_info: dict[str, Any] | None = None


class TaskTrackerError(Exception):
    """Base exception for all task tracker errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(TaskTrackerError):
    """Request input failed validation."""
    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.details = details or []

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response


class DuplicateEmailError(TaskTrackerError):
    """Registration attempted with an email that already has an account."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Email already exists. Please use a different email.",
            "DUPLICATE_EMAIL", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidCredentialsError(TaskTrackerError):
    """Login failed. Deliberately identical for unknown email and wrong password."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid email or password",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class UnauthenticatedError(TaskTrackerError):
    """Protected route called without a bearer token."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Access token required",
            "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(TaskTrackerError):
    """Bearer token present but invalid, expired or malformed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid or expired token",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class InvalidTokenError(TaskTrackerError):
    """Token failed signature, structure or expiry checks."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            "Invalid or expired token",
            "INVALID_TOKEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.reason = reason


class NotFoundOrUnauthorizedError(TaskTrackerError):
    """Task does not exist or belongs to someone else."""
    def __init__(
        self, task_id: int, action: str = "access",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Task not found or you do not have permission to {action} it",
            "TASK_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.task_id = task_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ConfigurationError(TaskTrackerError):
    """Required configuration missing or malformed. Fatal at startup."""
    def __init__(self, setting: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Configuration error for {setting}: {reason}",
            "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.setting = setting

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["message"] = "Server is not configured correctly"
        return response


class PersistenceError(TaskTrackerError):
    """Database operation failed. Details stay in the logs."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "PERSISTENCE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["message"] = "An unexpected error occurred"
        return response
