"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, TaskId wrap UUIDs — never use bare UUID in domain logic
    - TaskStatus is the only source of task state strings (no raw "Completed" literals)
    - Drafts are frozen: validated once at the boundary, never mutated afterwards
    - VerifiedSession is produced only by the token verifier

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Drafts carry an already-hashed password: plaintext never reaches a store
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
TaskId = NewType("TaskId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task lifecycle states — maps to DB `status` column. Pending -> Completed only."""
    PENDING = "Pending"
    COMPLETED = "Completed"


# ─── Drafts (validated input, pre-persistence) ───────────────────

@dataclass(frozen=True)
class UserDraft:
    name: str
    username: str
    email: str
    password_hash: str


@dataclass(frozen=True)
class TaskDraft:
    text: str
    owner_id: UserId


# ─── Session identity ────────────────────────────────────────────

@dataclass(frozen=True)
class SessionClaims:
    """Claims embedded in a session token. Only user_id is contractual."""
    user_id: UserId
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class VerifiedSession:
    """Authenticated identity attached to a request by the auth gate."""
    claims: SessionClaims
    issued_at: datetime
    expires_at: datetime

    @property
    def user_id(self) -> UserId:
        return self.claims.user_id
