"""Task Routes — owner-scoped task CRUD behind the auth gate.

Invariants:
    - Every route depends on require_identity: no token -> 401, bad token -> 403
    - The identity from the gate is the only owner source passed to TaskService
    - Not found and not owned both answer 404; completing twice answers 409

Design Decisions:
    - Task ids parsed as UUID by FastAPI: malformed ids fail validation (400)
      before any lookup
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.api.auth_gate import require_identity
from app.api.dependencies import get_task_service
from app.core.domain_types import TaskId, VerifiedSession
from app.schemas.task import (
    MessageEnvelope, TaskCreate, TaskEnvelope, TaskListEnvelope, TaskResponse,
)
from app.services.task_service import TaskService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=TaskListEnvelope)
async def list_tasks(
    identity: VerifiedSession = Depends(require_identity),
    tasks: TaskService = Depends(get_task_service),
):
    """List the caller's tasks."""
    owned = await tasks.list_owned(identity)
    return TaskListEnvelope(
        data=[TaskResponse.model_validate(t) for t in owned],
    )


@router.post(
    "", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskCreate,
    identity: VerifiedSession = Depends(require_identity),
    tasks: TaskService = Depends(get_task_service),
):
    """Create a Pending task owned by the caller."""
    task = await tasks.create(identity, body.text)
    return TaskEnvelope(
        message="Task created.", data=TaskResponse.model_validate(task),
    )


@router.post("/{task_id}/complete", response_model=TaskEnvelope)
async def complete_task(
    task_id: UUID,
    identity: VerifiedSession = Depends(require_identity),
    tasks: TaskService = Depends(get_task_service),
):
    """Mark one of the caller's Pending tasks as Completed."""
    task = await tasks.complete(identity, TaskId(task_id))
    return TaskEnvelope(
        message="Task completed.", data=TaskResponse.model_validate(task),
    )


@router.delete("/{task_id}", response_model=MessageEnvelope)
async def delete_task(
    task_id: UUID,
    identity: VerifiedSession = Depends(require_identity),
    tasks: TaskService = Depends(get_task_service),
):
    """Delete one of the caller's tasks, whatever its status."""
    await tasks.delete(identity, TaskId(task_id))
    return MessageEnvelope(message="Task deleted.")
