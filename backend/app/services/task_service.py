"""Task Service — create, list, complete, delete on behalf of an authenticated owner.

Invariants:
    - The owner ALWAYS comes from the VerifiedSession handed over by the auth gate;
      no client-supplied owner field is ever read
    - Every mutation is preceded by find_owned (id AND owner in one lookup)
    - Completing a Completed task raises AlreadyCompletedError and changes nothing,
      including when another request completed or deleted it after find_owned
    - Delete is unconditional once ownership is established (any status)

Design Decisions:
    - Ownership is never re-checked after an unscoped lookup: there is no
      unscoped lookup to begin with
"""

import logging

from app.core.domain_types import TaskDraft, TaskId, VerifiedSession
from app.core.errors import AlreadyCompletedError
from app.core.repository_protocols import TaskLike, TaskRepository
from app.core.task_rules import check_completable

logger = logging.getLogger(__name__)


class TaskService:
    """Owner-scoped task lifecycle."""

    def __init__(self, store: TaskRepository):
        self.store = store

    async def create(self, identity: VerifiedSession, text: str) -> TaskLike:
        task = await self.store.insert(
            TaskDraft(text=text, owner_id=identity.user_id),
        )
        logger.info(
            "Task created",
            extra={"user_id": identity.user_id, "task_id": task.id},
        )
        return task

    async def list_owned(self, identity: VerifiedSession) -> list[TaskLike]:
        return await self.store.list_by_owner(identity.user_id)

    async def complete(
        self, identity: VerifiedSession, task_id: TaskId,
    ) -> TaskLike:
        task = await self.store.find_owned(task_id, identity.user_id)
        check_completable(str(task_id), task.status)
        if not await self.store.mark_completed(task_id):
            # Lost a race: the row was deleted or completed since find_owned
            await self.store.find_owned(task_id, identity.user_id)
            raise AlreadyCompletedError(str(task_id))
        logger.info(
            "Task completed",
            extra={"user_id": identity.user_id, "task_id": task_id},
        )
        return task

    async def delete(self, identity: VerifiedSession, task_id: TaskId) -> None:
        await self.store.find_owned(task_id, identity.user_id)
        await self.store.delete(task_id)
        logger.info(
            "Task deleted",
            extra={"user_id": identity.user_id, "task_id": task_id},
        )
