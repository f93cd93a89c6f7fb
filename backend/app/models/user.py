"""User ORM — persists credentials for sign-up and login.

Invariants:
    - id is UUID primary key (client-side default)
    - username and email are each globally unique (DB unique constraints);
      the constraint, not an in-process check, decides duplicate sign-ups
    - password_hash holds bcrypt output only, never a plaintext password
    - updated_at refreshed on every ORM update

Design Decisions:
    - No relationship() to Task: tasks are always loaded through owner-scoped
      queries, and ON DELETE CASCADE on tasks.user_id removes them with the user
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Registered account — owner of tasks."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utc_now, onupdate=_utc_now,
    )
