"""Credential Store — SQLAlchemy-backed user persistence.

Invariants:
    - insert_user receives an already-hashed password (UserDraft)
    - Duplicate username/email is detected by the database unique constraints and
      surfaced as DuplicateCredentialError by exception TYPE (IntegrityError),
      never by inspecting driver message text
    - find_user_by_email raises ResourceNotFoundError when absent

Design Decisions:
    - Rollback inside the store on IntegrityError: the session stays usable for
      callers that hold it directly (tests, scripts) as well as through get_db
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import UserDraft, UserId
from app.core.errors import DuplicateCredentialError, ResourceNotFoundError
from app.models.user import User

logger = logging.getLogger(__name__)


class CredentialStore:
    """User records keyed by id, unique on username and email."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert_user(self, draft: UserDraft) -> UserId:
        user = User(
            name=draft.name,
            username=draft.username,
            email=draft.email,
            password_hash=draft.password_hash,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info("Sign-up rejected: duplicate username or email")
            raise DuplicateCredentialError()
        return UserId(user.id)

    async def find_user_by_email(self, email: str) -> User:
        result = await self.db.execute(
            select(User).where(User.email == email).limit(1),
        )
        user = result.scalar_one_or_none()
        if not user:
            raise ResourceNotFoundError("User", email)
        return user
