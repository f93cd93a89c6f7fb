"""Auth Service — sign-up and login orchestration.

Invariants:
    - Sign-up hashes the password BEFORE anything reaches the credential store
    - Login failures are uniform: unknown email and wrong password both raise
      InvalidCredentialsError, and both paths pay for one bcrypt verification
    - Issued tokens carry the user id; username/email ride along as convenience

Design Decisions:
    - Collaborators injected (store, hasher, token service): no module-level handles
    - Impureim sandwich: IO (store, hasher) around pure token issuance
"""

import logging

from app.core.domain_types import SessionClaims, UserDraft, UserId
from app.core.errors import InvalidCredentialsError, ResourceNotFoundError
from app.core.repository_protocols import CredentialRepository
from app.infrastructure.password_hasher import PasswordHasher
from app.infrastructure.token_service import TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """Registers users and exchanges credentials for session tokens."""

    def __init__(
        self,
        store: CredentialRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    async def sign_up(
        self, name: str, username: str, email: str, password: str,
    ) -> UserId:
        """Create a user. Raises DuplicateCredentialError on collision."""
        password_hash = await self.hasher.hash_async(password)
        user_id = await self.store.insert_user(UserDraft(
            name=name, username=username, email=email,
            password_hash=password_hash,
        ))
        logger.info("User signed up", extra={"user_id": user_id})
        return user_id

    async def login(self, email: str, password: str) -> str:
        """Return a signed session token or raise InvalidCredentialsError."""
        try:
            user = await self.store.find_user_by_email(email)
        except ResourceNotFoundError:
            await self.hasher.verify_async(password, self.hasher.dummy_hash)
            logger.info("Login rejected")
            raise InvalidCredentialsError()

        if not await self.hasher.verify_async(password, user.password_hash):
            logger.info("Login rejected", extra={"user_id": user.id})
            raise InvalidCredentialsError()

        logger.info("Login succeeded", extra={"user_id": user.id})
        return self.tokens.issue(SessionClaims(
            user_id=UserId(user.id), username=user.username, email=user.email,
        ))
