"""Password Hasher — bcrypt hashing and constant-time verification.

Invariants:
    - Every hash embeds a fresh random salt: hashing the same password twice
      yields different strings that both verify
    - verify() returns False on mismatch and never raises for a well-formed hash
    - Plaintext passwords are never logged, stored, or returned
    - Passwords over bcrypt's 72-byte input limit never verify

Design Decisions:
    - bcrypt over hashlib.pbkdf2: adaptive cost, salt embedded in output
    - Async variants run on a worker thread (asyncio.to_thread): bcrypt is
      CPU-bound and would otherwise stall the event loop for every login
    - dummy_hash lets callers spend the same time on "no such user" as on
      "wrong password"
"""

import asyncio
import logging

import bcrypt

from app.core.errors import HashingError, ValidationError

logger = logging.getLogger(__name__)

MIN_ROUNDS: int = 4
MAX_ROUNDS: int = 31
MAX_PASSWORD_BYTES: int = 72


class PasswordHasher:
    """Salted, adaptive one-way hashing with a configurable work factor."""

    def __init__(self, rounds: int = 10):
        if not isinstance(rounds, int) or not MIN_ROUNDS <= rounds <= MAX_ROUNDS:
            raise HashingError(
                f"work factor must be an integer in [{MIN_ROUNDS}, {MAX_ROUNDS}]",
            )
        self.rounds = rounds
        self.dummy_hash = self.hash("dummy-password-for-timing")

    def hash(self, password: str) -> str:
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes", "password",
            )
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(encoded, salt).decode("utf-8")
        except (OSError, ValueError) as e:
            logger.error(f"bcrypt hashing failed: {type(e).__name__}")
            raise HashingError("random source or work factor unavailable")

    def verify(self, password: str, password_hash: str) -> bool:
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except ValueError as e:
            logger.error(f"bcrypt verification failed: {e}")
            raise HashingError("stored hash is malformed")

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify, password, password_hash)
