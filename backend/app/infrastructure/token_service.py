"""Session Tokens — HS256 JWT issuance and verification.

Invariants:
    - A TokenService cannot exist without a signing secret (ConfigurationError)
    - verify() checks signature and structure BEFORE reading any claim, then expiry
    - Bad signature or malformed payload -> TokenInvalidError
    - Valid signature but now >= exp -> TokenExpiredError
    - Only `sub` is a required claim; username/email are optional denormalization

Design Decisions:
    - PyJWT with algorithms pinned to the configured one (no "none", no alg confusion)
    - Expiry checked against an injectable clock instead of PyJWT's wall clock,
      so lifetime can be tested without sleeping
    - No revocation list: logout is the client discarding its token
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import UUID

import jwt

from app.core.domain_types import SessionClaims, UserId, VerifiedSession
from app.core.errors import (
    ConfigurationError, TokenExpiredError, TokenInvalidError,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and verifies signed, time-bounded session tokens."""

    def __init__(
        self,
        secret: str | None,
        algorithm: str = "HS256",
        ttl_seconds: int = 3600,
        clock: Clock = _utc_now,
    ):
        if not secret:
            raise ConfigurationError("JWT_SECRET is not set")
        if ttl_seconds <= 0:
            raise ConfigurationError("Token lifetime must be positive")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    def issue(self, claims: SessionClaims) -> str:
        """Sign claims with iat=now and exp=now+ttl."""
        issued_at = int(self._clock().timestamp())
        payload: dict[str, object] = {
            "sub": str(claims.user_id),
            "iat": issued_at,
            "exp": issued_at + int(self._ttl.total_seconds()),
        }
        if claims.username is not None:
            payload["username"] = claims.username
        if claims.email is not None:
            payload["email"] = claims.email
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> VerifiedSession:
        """Return the verified session or raise a TokenError subclass."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "require": ["sub", "iat", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.PyJWTError as e:
            logger.info(f"Rejected token: {type(e).__name__}")
            raise TokenInvalidError()

        try:
            session = _to_session(payload)
        except (TypeError, ValueError, OverflowError, OSError) as e:
            logger.info(f"Rejected token claims: {type(e).__name__}")
            raise TokenInvalidError()

        if self._clock() >= session.expires_at:
            raise TokenExpiredError()
        return session


def _to_session(payload: dict) -> VerifiedSession:
    """Build typed claims from a signature-checked payload."""
    username = payload.get("username")
    email = payload.get("email")
    if username is not None and not isinstance(username, str):
        raise TypeError("username claim must be a string")
    if email is not None and not isinstance(email, str):
        raise TypeError("email claim must be a string")
    iat, exp = payload["iat"], payload["exp"]
    if not isinstance(iat, int) or not isinstance(exp, int):
        raise TypeError("iat/exp claims must be integers")
    return VerifiedSession(
        claims=SessionClaims(
            user_id=UserId(UUID(str(payload["sub"]))),
            username=username,
            email=email,
        ),
        issued_at=datetime.fromtimestamp(iat, timezone.utc),
        expires_at=datetime.fromtimestamp(exp, timezone.utc),
    )
