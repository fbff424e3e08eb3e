"""Root conftest — shared test configuration."""

import os

# Settings are read once (lru_cache) when tasktracker.main is imported
os.environ.setdefault(
    "JWT_SECRET", "test-signing-secret-0123456789abcdef0123456789",
)
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
