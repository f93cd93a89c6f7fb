"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys ON
      (so ON DELETE CASCADE behaves as on PostgreSQL)
    - get_db, get_token_service and get_password_hasher overridden for route tests
    - app.state.db_manager points at the test engine for the readiness probe

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for store and route tests
    - StaticPool: every session shares the single in-memory connection
"""

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

import app.models  # noqa: F401
from app.api.dependencies import get_password_hasher, get_token_service
from app.core.domain_types import UserDraft, UserId
from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.main import app
from app.services.credential_store import CredentialStore
from app.services.task_store import TaskStore


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
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
    return CredentialStore(test_db)


@pytest.fixture
def task_store(test_db):
    return TaskStore(test_db)


@pytest.fixture
def make_user(credential_store):
    """Insert a user with a placeholder hash; returns its UserId."""

    async def _make(username: str, email: str | None = None) -> UserId:
        return await credential_store.insert_user(UserDraft(
            name=username.title(),
            username=username,
            email=email or f"{username}@example.com",
            password_hash="$2b$04$" + "x" * 53,
        ))

    return _make


@pytest.fixture
async def client(test_engine, test_session_factory, token_service, hasher):
    """FastAPI test client with DB, token and hasher dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: token_service
    app.dependency_overrides[get_password_hasher] = lambda: hasher

    # The readiness probe reads the manager from app.state directly
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    del app.state.db_manager
