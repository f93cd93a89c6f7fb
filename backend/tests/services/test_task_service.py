"""Task Service — verifies ownership enforcement and the completion rule.

Invariants:
    - Owner always comes from the identity
    - Complete/delete of a foreign task -> ResourceNotFoundError, task untouched
    - Completing twice -> AlreadyCompletedError, status stays Completed
    - A delete or complete landing between lookup and update is reported
      (404 / 409), never answered with a stale success
    - Delete works whatever the status
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from app.core.domain_types import (
    SessionClaims, TaskId, TaskStatus, UserId, VerifiedSession,
)
from app.core.errors import AlreadyCompletedError, ResourceNotFoundError
from app.services.task_service import TaskService
from app.services.task_store import TaskStore


def _identity(user_id: UserId) -> VerifiedSession:
    now = datetime.now(timezone.utc)
    return VerifiedSession(
        claims=SessionClaims(user_id=user_id), issued_at=now, expires_at=now,
    )


@pytest.fixture
def service(task_store):
    return TaskService(task_store)


@pytest.fixture
async def ann(make_user):
    return _identity(await make_user("ann1"))


@pytest.fixture
async def bob(make_user):
    return _identity(await make_user("bob1"))


async def test_create_sets_owner_from_identity(service, ann):
    task = await service.create(ann, "buy milk")
    assert task.user_id == ann.user_id
    assert task.status == TaskStatus.PENDING.value


async def test_list_owned_only_returns_own_tasks(service, ann, bob):
    await service.create(ann, "ann task")
    await service.create(bob, "bob task")
    assert [t.text for t in await service.list_owned(ann)] == ["ann task"]
    assert [t.text for t in await service.list_owned(bob)] == ["bob task"]


async def test_complete_transitions_to_completed(service, ann):
    task = await service.create(ann, "buy milk")
    completed = await service.complete(ann, TaskId(task.id))
    assert completed.status == TaskStatus.COMPLETED.value


async def test_complete_twice_rejected(service, task_store, ann):
    task = await service.create(ann, "buy milk")
    await service.complete(ann, TaskId(task.id))
    with pytest.raises(AlreadyCompletedError):
        await service.complete(ann, TaskId(task.id))
    found = await task_store.find_owned(TaskId(task.id), ann.user_id)
    assert found.status == TaskStatus.COMPLETED.value


async def test_complete_foreign_task_not_found(service, task_store, ann, bob):
    task = await service.create(ann, "buy milk")
    with pytest.raises(ResourceNotFoundError):
        await service.complete(bob, TaskId(task.id))
    found = await task_store.find_owned(TaskId(task.id), ann.user_id)
    assert found.status == TaskStatus.PENDING.value


async def test_complete_missing_task_not_found(service, ann):
    with pytest.raises(ResourceNotFoundError):
        await service.complete(ann, TaskId(uuid4()))


async def test_delete_pending_task(service, ann):
    task = await service.create(ann, "buy milk")
    await service.delete(ann, TaskId(task.id))
    assert await service.list_owned(ann) == []


async def test_delete_completed_task(service, ann):
    task = await service.create(ann, "buy milk")
    await service.complete(ann, TaskId(task.id))
    await service.delete(ann, TaskId(task.id))
    assert await service.list_owned(ann) == []


async def test_delete_foreign_task_not_found(service, ann, bob):
    task = await service.create(ann, "buy milk")
    with pytest.raises(ResourceNotFoundError):
        await service.delete(bob, TaskId(task.id))
    assert len(await service.list_owned(ann)) == 1


class _PausingStore(TaskStore):
    """TaskStore that runs another request's work right after find_owned."""

    def __init__(self, db, meanwhile):
        super().__init__(db)
        self._meanwhile = meanwhile

    async def find_owned(self, task_id, owner_id):
        task = await super().find_owned(task_id, owner_id)
        meanwhile, self._meanwhile = self._meanwhile, None
        if meanwhile:
            await meanwhile()
        return task


async def test_complete_after_concurrent_delete_not_found(
    test_db, test_session_factory, service, ann,
):
    task = await service.create(ann, "buy milk")

    async def other_request_deletes():
        async with test_session_factory() as other_db:
            await TaskService(TaskStore(other_db)).delete(ann, TaskId(task.id))

    racing = TaskService(_PausingStore(test_db, other_request_deletes))
    with pytest.raises(ResourceNotFoundError):
        await racing.complete(ann, TaskId(task.id))
    assert await service.list_owned(ann) == []


async def test_concurrent_completes_report_second_as_already_completed(
    test_db, test_session_factory, service, task_store, ann,
):
    task = await service.create(ann, "buy milk")

    async def other_request_completes():
        async with test_session_factory() as other_db:
            await TaskService(TaskStore(other_db)).complete(ann, TaskId(task.id))

    racing = TaskService(_PausingStore(test_db, other_request_completes))
    with pytest.raises(AlreadyCompletedError):
        await racing.complete(ann, TaskId(task.id))

    async with test_session_factory() as fresh_db:
        found = await TaskStore(fresh_db).find_owned(TaskId(task.id), ann.user_id)
    assert found.status == TaskStatus.COMPLETED.value
