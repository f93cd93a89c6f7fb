"""Task Schemas — Pydantic models for the /tasks endpoints.

Invariants:
    - TaskCreate.text: 1-10000 chars, stripped, non-empty
    - TaskCreate carries no owner field; anything extra in the body is ignored
    - TaskResponse never exposes the owner id

Design Decisions:
    - from_attributes: responses built straight from ORM rows
    - Success envelope {"status": "success", ...} kept uniform across endpoints
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.domain_types import TaskStatus


class TaskCreate(BaseModel):
    """Task creation — validates text length and whitespace."""
    text: str = Field(min_length=1, max_length=10_000)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("text cannot be empty or whitespace")
        return v


class TaskResponse(BaseModel):
    """Task as seen by its owner."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    text: str
    status: TaskStatus
    created_at: datetime


class TaskEnvelope(BaseModel):
    status: str = "success"
    message: str
    data: TaskResponse


class TaskListEnvelope(BaseModel):
    status: str = "success"
    data: list[TaskResponse]


class MessageEnvelope(BaseModel):
    status: str = "success"
    message: str
