"""Task ORM — a to-do item owned by exactly one user.

Invariants:
    - user_id is non-nullable: every task has exactly one owner
    - status is one of TaskStatus values; new tasks are Pending
    - Deleting the owner removes the task (ON DELETE CASCADE)

Design Decisions:
    - status stored as String(20) holding the enum value (matches migration 001)
    - Index on user_id: every read is owner-scoped
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.core.domain_types import TaskStatus
from app.db.base import Base


class Task(Base):
    """Owner-scoped task."""
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(
            "status IN ('Pending', 'Completed')", name="tasks_status_check",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TaskStatus.PENDING.value,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
