"""Task Rules — pure validation of task text and status transitions.

Invariants:
    - Pure: no IO, no state mutation, raises typed domain errors only
    - Pending -> Completed is the only legal transition; completing twice is an error

Design Decisions:
    - Separate from task_service: the shell orchestrates IO around these checks,
      and they are unit-testable without a database
"""

from app.core.domain_types import TaskStatus
from app.core.errors import AlreadyCompletedError, ValidationError

MAX_TASK_TEXT_LENGTH: int = 10_000


def normalize_task_text(text: str) -> str:
    """Strip surrounding whitespace; reject empty or oversized text."""
    stripped = text.strip()
    if not stripped:
        raise ValidationError("Task text cannot be empty", "text")
    if len(stripped) > MAX_TASK_TEXT_LENGTH:
        raise ValidationError(
            f"Task text exceeds {MAX_TASK_TEXT_LENGTH} characters", "text",
        )
    return stripped


def check_completable(task_id: str, status: str) -> None:
    """Raise AlreadyCompletedError unless the task is still Pending."""
    if TaskStatus(status) is TaskStatus.COMPLETED:
        raise AlreadyCompletedError(task_id)
