"""Failure Responses — backend failures over HTTP become generic 500s.

Invariants:
    - A driver failure inside a request -> 500 STORAGE_ERROR, no driver text in the body
    - A hashing failure -> 500 HASHING_ERROR, no cause in the body
    - Anything unexpected (e.g. during sign-up) -> 500 INTERNAL_ERROR via the catch-all
"""

from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from app.core.domain_types import SessionClaims, UserId
from app.core.errors import HashingError
from app.infrastructure.database import get_db
from app.infrastructure.password_hasher import PasswordHasher
from app.main import app
from app.services.auth_service import AuthService
from app.services.task_store import TaskStore

DRIVER_TEXT = "could not connect to 10.1.2.3:5432 as taskadmin"

ANN = {
    "name": "Ann", "username": "ann1",
    "email": "ann@x.com", "password": "longenoughpw",
}


@pytest.fixture
async def lenient_client(client):
    """Same overrides as `client`, but app exceptions surface only as responses."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def auth_header(token_service):
    token = token_service.issue(SessionClaims(user_id=UserId(uuid4())))
    return {"Authorization": f"Bearer {token}"}


async def test_driver_failure_returns_storage_error(
    lenient_client, auth_header, monkeypatch,
):
    # Real get_db: sessions come from app.state.db_manager and its error mapping
    app.dependency_overrides.pop(get_db)

    async def broken_list(self, owner_id):
        raise OperationalError(
            "SELECT tasks.id FROM tasks", {}, ConnectionError(DRIVER_TEXT),
        )

    monkeypatch.setattr(TaskStore, "list_by_owner", broken_list)

    res = await lenient_client.get("/tasks", headers=auth_header)
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "STORAGE_ERROR"
    assert DRIVER_TEXT not in res.text
    assert "SELECT" not in res.text


async def test_hashing_failure_hides_cause(lenient_client, monkeypatch):
    await lenient_client.post("/signup", json=ANN)

    async def broken_verify(self, password, password_hash):
        raise HashingError("stored hash is malformed")

    monkeypatch.setattr(PasswordHasher, "verify_async", broken_verify)

    res = await lenient_client.post(
        "/login", json={"email": ANN["email"], "password": ANN["password"]},
    )
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "HASHING_ERROR"
    assert "malformed" not in res.text
    assert ANN["password"] not in res.text


async def test_unexpected_signup_failure_returns_500(
    lenient_client, monkeypatch,
):
    async def exploding_sign_up(self, name, username, email, password):
        raise RuntimeError(f"{DRIVER_TEXT} password={password}")

    monkeypatch.setattr(AuthService, "sign_up", exploding_sign_up)

    res = await lenient_client.post("/signup", json=ANN)
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "INTERNAL_ERROR"
    assert DRIVER_TEXT not in res.text
    assert ANN["password"] not in res.text
