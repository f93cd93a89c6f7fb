"""Task Tracker API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskTrackerError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The process refuses to start without a JWT signing secret (ConfigurationError)
    - Token service, password hasher and DB pool are built once in the lifespan,
      stored on app.state, and the pool is drained on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers: TaskTrackerError (domain), RequestValidationError
      (Pydantic), Exception (catch-all) — never leaks internal details
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.config import Settings, get_settings
from app.core.errors import ConfigurationError
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.observability import setup_logging
from app.infrastructure.password_hasher import PasswordHasher
from app.infrastructure.token_service import TokenService
from app.api.routes import auth, health, tasks

logger = logging.getLogger(__name__)


def build_collaborators(app: FastAPI, settings: Settings) -> None:
    """Construct app-scoped collaborators. Raises ConfigurationError if unusable."""
    if not settings.jwt_secret:
        raise ConfigurationError(
            "JWT_SECRET is not set; refusing to serve traffic",
        )
    app.state.token_service = TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl_seconds=settings.access_token_ttl_seconds,
    )
    app.state.password_hasher = PasswordHasher(settings.password_hash_rounds)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    try:
        build_collaborators(app, settings)
    except ConfigurationError as e:
        logger.critical(e.message, extra={"error_code": e.code})
        raise
    logger.info("Task Tracker API started")
    yield
    logger.info("Task Tracker API shutting down")
    await app.state.db_manager.dispose()


app = FastAPI(
    title="Task Tracker API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(tasks.router)

register_error_handlers(app)
