"""Auth Routes — sign-up and login.

Invariants:
    - POST /signup -> 201; duplicate username/email -> 400; anything unexpected -> 500
    - POST /login -> 200 with token; bad email OR bad password -> identical 401
    - Request bodies validated by Pydantic before the service is called

Design Decisions:
    - Thin routes: all logic in AuthService
"""

import logging

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_auth_service
from app.schemas.auth import (
    LoginRequest, LoginResponse, SignupRequest, SignupResponse,
)
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


@router.post(
    "/signup", response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
)
async def sign_up(
    body: SignupRequest, auth: AuthService = Depends(get_auth_service),
):
    """Register a new user."""
    await auth.sign_up(
        name=body.name, username=body.username,
        email=body.email, password=body.password,
    )
    return SignupResponse()


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest, auth: AuthService = Depends(get_auth_service),
):
    """Exchange email and password for a session token."""
    token = await auth.login(body.email, body.password)
    return LoginResponse(token=token)
