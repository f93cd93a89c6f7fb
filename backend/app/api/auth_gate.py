"""Auth Gate — the single authentication enforcement point for task routes.

Invariants:
    - No bearer token -> MissingTokenError (401)
    - Token present but invalid or expired -> TokenError (403); never a silent
      fallback to anonymous
    - On success the VerifiedSession is set on request.state.identity for this
      request only and returned to the route, which passes it to the service
    - Downstream code never re-derives identity from headers or bodies

Design Decisions:
    - HTTPBearer(auto_error=False): we raise our own typed errors so the
      401/403 split and error envelope stay uniform
"""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.dependencies import get_token_service
from app.core.domain_types import VerifiedSession
from app.core.errors import MissingTokenError, TokenError
from app.infrastructure.token_service import TokenService

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


async def require_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    tokens: TokenService = Depends(get_token_service),
) -> VerifiedSession:
    """Verify the bearer token and attach the identity to the request."""
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()
    try:
        identity = tokens.verify(credentials.credentials)
    except TokenError as e:
        logger.info(
            f"Auth gate rejected request: {e.code}",
            extra={"path": request.url.path},
        )
        raise
    request.state.identity = identity
    return identity
