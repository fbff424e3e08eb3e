"""Auth Routes — register/login over HTTP.

Invariants:
    - Register returns 201 with a token that resolves to the new user
    - Duplicate email (any case) → 400 DUPLICATE_EMAIL
    - Unknown email and wrong password → identical 401 bodies (timestamp aside)
"""

from tasktracker.core.tokens import TokenService
from tasktracker.config import get_settings
from tasktracker.services.credential_store import CredentialStore
from tasktracker.core.passwords import PasswordHasher

REGISTRATION = {
    "first_name": "Ada",
    "middle_name": "King",
    "last_name": "Lovelace",
    "email": "Ada@Example.com",
    "password": "Secret123",
}


def _without_timestamp(body: dict) -> dict:
    error = dict(body["error"])
    error.pop("timestamp", None)
    return error


async def test_register_returns_token_for_new_user(client, test_db):
    res = await client.post("/api/register", json=REGISTRATION)
    assert res.status_code == 201
    data = res.json()
    assert data["message"] == "User registered successfully"
    assert data["user"]["email"] == "ada@example.com"
    assert "password" not in data["user"]
    assert "password_hash" not in data["user"]
    assert "created_at" not in data["user"]

    user_id = TokenService.from_settings(get_settings()).verify(data["token"])
    assert user_id == data["user"]["id"]

    store = CredentialStore(test_db, PasswordHasher(rounds=4))
    user = await store.find_by_id(user_id)
    assert user.first_name == "Ada"
    assert user.middle_name == "King"
    assert user.last_name == "Lovelace"
    assert user.email == "ada@example.com"


async def test_register_duplicate_email_is_rejected(client):
    await client.post("/api/register", json=REGISTRATION)
    res = await client.post(
        "/api/register", json={**REGISTRATION, "email": "ADA@example.COM"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DUPLICATE_EMAIL"


async def test_register_validation_errors_are_field_level(client):
    res = await client.post(
        "/api/register",
        json={**REGISTRATION, "first_name": "Ada99", "password": "weak"},
    )
    assert res.status_code == 400
    body = res.json()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    fields = {d["field"] for d in body["details"]}
    assert "body.first_name" in fields
    assert "body.password" in fields


async def test_login_returns_token_for_same_user(client):
    reg = (await client.post("/api/register", json=REGISTRATION)).json()
    res = await client.post(
        "/api/login", json={"email": "ada@example.com", "password": "Secret123"},
    )
    assert res.status_code == 200
    data = res.json()
    assert data["message"] == "Login successful"
    assert data["user"] == reg["user"]
    tokens = TokenService.from_settings(get_settings())
    assert tokens.verify(data["token"]) == reg["user"]["id"]


async def test_login_failures_are_indistinguishable(client):
    await client.post("/api/register", json=REGISTRATION)
    wrong_password = await client.post(
        "/api/login", json={"email": "ada@example.com", "password": "Wrong123"},
    )
    unknown_email = await client.post(
        "/api/login", json={"email": "nobody@example.com", "password": "Secret123"},
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert _without_timestamp(wrong_password.json()) == _without_timestamp(unknown_email.json())
    assert wrong_password.json()["error"]["code"] == "INVALID_CREDENTIALS"


async def test_login_requires_email_and_password(client):
    res = await client.post("/api/login", json={"email": "ada@example.com"})
    assert res.status_code == 400


async def test_register_rejects_malformed_email(client):
    for email in ("a@b..c", "x@-y.com"):
        res = await client.post("/api/register", json={**REGISTRATION, "email": email})
        assert res.status_code == 400, email
        fields = {d["field"] for d in res.json()["error"]["details"]}
        assert "body.email" in fields
    res = await client.post(
        "/api/login", json={"email": "a@b..c", "password": "Secret123"},
    )
    assert res.status_code == 400
