"""Error Hierarchy — typed, categorized exceptions for all task-tracker failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages
    - "Not found" and "not owned" share ResourceNotFoundError; "no such user" and
      "wrong password" share InvalidCredentialsError

Design Decisions:
    - Single hierarchy with TaskTrackerError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Expected outcomes (duplicate, not found, already completed) are exception types,
      never error-message text: callers match on the class
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    task_id: str | None = None
    debug_info: dict[str, Any] | None = None


class TaskTrackerError(Exception):
    """Base exception for all task-tracker errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(TaskTrackerError):
    """Input failed domain validation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class DuplicateCredentialError(TaskTrackerError):
    """Username or email already belongs to another user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User already exists. Please use a different email or username.",
            "DUPLICATE_CREDENTIAL", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidCredentialsError(TaskTrackerError):
    """Login failed. Deliberately silent about which part was wrong."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials.",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class MissingTokenError(TaskTrackerError):
    """Request carried no bearer token."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized",
            "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class TokenError(TaskTrackerError):
    """Bearer token was presented but cannot be accepted."""


class TokenInvalidError(TokenError):
    """Bad signature or malformed token."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid token",
            "TOKEN_INVALID", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 403,
        )


class TokenExpiredError(TokenError):
    """Structurally valid token past its expiry."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Token expired",
            "TOKEN_EXPIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(TaskTrackerError):
    """Requested resource does not exist or is not visible to the caller."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class AlreadyCompletedError(TaskTrackerError):
    """Task is already Completed; completing twice is reported, not ignored."""
    def __init__(self, task_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Task '{task_id}' is already completed",
            "TASK_ALREADY_COMPLETED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ConfigurationError(TaskTrackerError):
    """Process is misconfigured. Raised at startup, never per request."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class HashingError(TaskTrackerError):
    """Password hashing backend failed. The cause stays in `detail`, out of responses."""
    def __init__(self, detail: str, context: ErrorContext | None = None):
        self.detail = detail
        super().__init__(
            "Password processing failed",
            "HASHING_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class StorageError(TaskTrackerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
