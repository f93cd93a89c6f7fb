"""Task Store — SQLAlchemy-backed, owner-scoped task persistence.

Invariants:
    - list_by_owner filters strictly by user_id; an empty list is not an error
    - find_owned conjoins task id AND owner id in ONE query: a task owned by
      someone else is indistinguishable from a task that does not exist
    - mark_completed/delete are keyed by id only; callers must have passed
      find_owned first (TaskService does)
    - mark_completed only moves a Pending row and reports whether it did;
      a row completed or deleted in the meantime yields False

Design Decisions:
    - Bulk UPDATE/DELETE statements over load-then-mutate: one round trip,
      atomic at the database
    - synchronize_session default ("auto") keeps an already-loaded Task in the
      identity map in step with the UPDATE
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import TaskDraft, TaskId, TaskStatus, UserId
from app.core.errors import ResourceNotFoundError
from app.core.task_rules import normalize_task_text
from app.models.task import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """Tasks, each owned by exactly one user."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, draft: TaskDraft) -> Task:
        task = Task(
            text=normalize_task_text(draft.text),
            status=TaskStatus.PENDING.value,
            user_id=draft.owner_id,
        )
        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task)
        return task

    async def list_by_owner(self, owner_id: UserId) -> list[Task]:
        result = await self.db.execute(
            select(Task)
            .where(Task.user_id == owner_id)
            .order_by(Task.created_at),
        )
        return list(result.scalars().all())

    async def find_owned(self, task_id: TaskId, owner_id: UserId) -> Task:
        result = await self.db.execute(
            select(Task)
            .where(Task.id == task_id)
            .where(Task.user_id == owner_id)
            .limit(1),
        )
        task = result.scalar_one_or_none()
        if not task:
            raise ResourceNotFoundError("Task", str(task_id))
        return task

    async def mark_completed(self, task_id: TaskId) -> bool:
        result = await self.db.execute(
            update(Task)
            .where(Task.id == task_id)
            .where(Task.status == TaskStatus.PENDING.value)
            .values(status=TaskStatus.COMPLETED.value),
        )
        await self.db.commit()
        return result.rowcount == 1

    async def delete(self, task_id: TaskId) -> None:
        await self.db.execute(delete(Task).where(Task.id == task_id))
        await self.db.commit()
