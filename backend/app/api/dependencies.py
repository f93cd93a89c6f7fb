"""Dependency Providers — wire request-scoped services from app-scoped collaborators.

Invariants:
    - TokenService and PasswordHasher are built ONCE in the lifespan and read from
      app.state; nothing here constructs them
    - Stores and services are per-request, bound to the request's DB session

Design Decisions:
    - Providers are plain functions so tests swap them via app.dependency_overrides
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database import get_db
from app.infrastructure.password_hasher import PasswordHasher
from app.infrastructure.token_service import TokenService
from app.services.auth_service import AuthService
from app.services.credential_store import CredentialStore
from app.services.task_service import TaskService
from app.services.task_store import TaskStore


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(CredentialStore(db), hasher, tokens)


def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(TaskStore(db))
