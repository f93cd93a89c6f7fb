"""Auth Schemas — sign-up and login request/response bodies.

Invariants:
    - SignupRequest.password: at least 8 characters, at most 72 UTF-8 bytes (bcrypt input limit)
    - name/username stripped, non-empty, at most 255 characters
    - Emails validated (EmailStr) and lower-cased so uniqueness is case-insensitive
    - Passwords never appear in any response model

Design Decisions:
    - Unknown fields ignored (Pydantic default): clients cannot smuggle in an id or hash
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

MAX_PASSWORD_BYTES = 72


def _strip_non_empty(v: str, field_name: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{field_name} cannot be empty or whitespace")
    return v


class SignupRequest(BaseModel):
    """Sign-up payload — validates shape before any hashing happens."""
    name: str = Field(min_length=1, max_length=255)
    username: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(
        min_length=8, description="Passwords must be at least 8 characters long",
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_non_empty(v, "name")

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return _strip_non_empty(v, "username")

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(
                f"password must be at most {MAX_PASSWORD_BYTES} bytes",
            )
        return v


class LoginRequest(BaseModel):
    """Login payload."""
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class SignupResponse(BaseModel):
    status: str = "success"
    message: str = "Your account is created"


class LoginResponse(BaseModel):
    status: str = "success"
    token: str
