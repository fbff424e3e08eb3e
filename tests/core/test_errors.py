"""Error Hierarchy — status codes, envelopes, and no internal detail leakage."""

import pytest

from tasktracker.core.errors import (
    ConfigurationError, DuplicateEmailError, ForbiddenError, InvalidCredentialsError,
    NotFoundOrUnauthorizedError, PersistenceError, TaskTrackerError,
    UnauthenticatedError, ValidationError,
)


@pytest.mark.parametrize("error,status,code", [
    (ValidationError("bad"), 400, "VALIDATION_ERROR"),
    (DuplicateEmailError(), 400, "DUPLICATE_EMAIL"),
    (InvalidCredentialsError(), 401, "INVALID_CREDENTIALS"),
    (UnauthenticatedError(), 401, "UNAUTHENTICATED"),
    (ForbiddenError(), 403, "FORBIDDEN"),
    (NotFoundOrUnauthorizedError(5), 404, "TASK_NOT_FOUND"),
    (ConfigurationError("jwt_secret", "missing"), 500, "CONFIGURATION_ERROR"),
    (PersistenceError("boom", "commit"), 500, "PERSISTENCE_ERROR"),
])
def test_error_taxonomy(error, status, code):
    assert isinstance(error, TaskTrackerError)
    assert error.http_status == status
    assert error.to_response()["error"]["code"] == code


def test_validation_error_carries_details():
    err = ValidationError("bad", details=[{"field": "title", "message": "required"}])
    assert err.to_response()["error"]["details"][0]["field"] == "title"


def test_persistence_error_hides_internal_message():
    err = PersistenceError("duplicate key value violates users_pkey", "commit")
    body = err.to_response()["error"]
    assert "users_pkey" not in body["message"]
    assert body["message"] == "An unexpected error occurred"


def test_configuration_error_hides_setting_name():
    body = ConfigurationError("jwt_secret", "missing").to_response()["error"]
    assert "jwt_secret" not in body["message"]


def test_not_found_message_names_action():
    assert "delete" in NotFoundOrUnauthorizedError(3, "delete").message
