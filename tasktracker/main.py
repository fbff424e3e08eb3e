"""Task Tracker API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskTrackerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database manager created on startup, kept on app.state, disposed on shutdown
    - Missing JWT secret aborts startup (ConfigurationError from TokenService)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers: TaskTrackerError (domain), RequestValidationError
      (Pydantic), Exception (catch-all) — never leaks internal details
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasktracker.api.error_handlers import register_error_handlers
from tasktracker.api.routes import auth, health, tasks
from tasktracker.config import get_settings
from tasktracker.core.tokens import TokenService
from tasktracker.infrastructure.database import DatabaseSessionManager
from tasktracker.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    TokenService.from_settings(settings)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Task Tracker API started")
    yield
    logger.info("Task Tracker API shutting down")
    await app.state.db_manager.close()
    app.state.db_manager = None


app = FastAPI(
    title="Task Tracker API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(tasks.router)

register_error_handlers(app)
