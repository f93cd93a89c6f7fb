"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - TaskRepository.find_owned is the only lookup allowed before a mutation:
      id and owner are conjoined in one query, so "not yours" == "not found"

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO
"""

from datetime import datetime
from typing import Protocol

from app.core.domain_types import TaskDraft, TaskId, UserDraft, UserId


class UserLike(Protocol):
    """Structural contract for stored users (ORM model or test double)."""
    id: UserId
    name: str
    username: str
    email: str
    password_hash: str


class TaskLike(Protocol):
    """Structural contract for stored tasks (ORM model or test double)."""
    id: TaskId
    text: str
    status: str
    user_id: UserId
    created_at: datetime


class CredentialRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def insert_user(self, draft: UserDraft) -> UserId: ...
    async def find_user_by_email(self, email: str) -> UserLike: ...


class TaskRepository(Protocol):
    """Contract for task persistence — implemented by shell."""
    async def insert(self, draft: TaskDraft) -> TaskLike: ...
    async def list_by_owner(self, owner_id: UserId) -> list[TaskLike]: ...
    async def find_owned(self, task_id: TaskId, owner_id: UserId) -> TaskLike: ...
    async def mark_completed(self, task_id: TaskId) -> bool: ...
    async def delete(self, task_id: TaskId) -> None: ...
