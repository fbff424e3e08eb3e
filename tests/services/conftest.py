"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - app.state.db_manager patched so the health probe hits the test DB

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so every session
      sees the same database
    - Stores built directly from test_db for store-level tests; routes go through
      the client fixture
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from tasktracker.core.passwords import PasswordHasher
from tasktracker.db.base import Base
from tasktracker.infrastructure.database import get_db, DatabaseSessionManager
from tasktracker.main import app
from tasktracker.models.user import User
from tasktracker.services.credential_store import CredentialStore
from tasktracker.services.task_store import TaskStore


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def credential_store(test_db):
    return CredentialStore(test_db, PasswordHasher(rounds=4))


@pytest.fixture
def task_store(test_db):
    return TaskStore(test_db)


async def _insert_user(db, email: str) -> User:
    user = User(
        first_name="Test", last_name="User",
        email=email, password_hash="not-a-real-hash",
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
async def owner(test_db):
    """User A — owns the tasks under test."""
    return await _insert_user(test_db, "owner@example.com")


@pytest.fixture
async def stranger(test_db):
    """User B — must never see user A's tasks."""
    return await _insert_user(test_db, "stranger@example.com")


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = getattr(app.state, "db_manager", None)
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db_manager = original_manager


def registration(email: str = "ada@example.com", **overrides) -> dict:
    body = {
        "first_name": "Ada",
        "middle_name": "King",
        "last_name": "Lovelace",
        "email": email,
        "password": "Secret123",
    }
    body.update(overrides)
    return body


@pytest.fixture
def register(client):
    """Register a user through the API; returns (token, user_json)."""
    async def _register(email: str = "ada@example.com", **overrides):
        res = await client.post("/api/register", json=registration(email, **overrides))
        assert res.status_code == 201, res.text
        data = res.json()
        return data["token"], data["user"]
    return _register
