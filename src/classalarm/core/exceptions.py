"""Error taxonomy surfaced to callers of ClassAlarm operations.

Every error carries a machine-readable ``code`` and an HTTP-style
``status_code`` so that a transport binding can map it without knowing
the individual classes. Messages are safe to show to the caller; they
never contain collaborator (store or push) error detail.
"""

from typing import Any


class ClassAlarmError(Exception):
    """Base class for all errors raised at the operation boundary."""

    code = "internal"
    status_code = 500
    default_message = "Internal error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Render the error for a transport binding."""
        return {"code": self.code, "message": self.message}


class UnauthenticatedError(ClassAlarmError):
    """Raised when an operation requiring a session is called anonymously."""

    code = "unauthenticated"
    status_code = 401
    default_message = "Login required."


class InvalidInputError(ClassAlarmError):
    """Raised when a parameter fails validation."""

    code = "invalid_input"
    status_code = 400
    default_message = "Invalid input."


class GroupNotFoundError(ClassAlarmError):
    """Raised when no group exists for a code."""

    code = "group_not_found"
    status_code = 404
    default_message = "Group not found."


class DuplicateCodeError(ClassAlarmError):
    """Raised when creating a group with a code that is already taken."""

    code = "duplicate_code"
    status_code = 409
    default_message = "Group code is already in use."


class CapacityExceededError(ClassAlarmError):
    """Raised when a new member would push a group past its capacity."""

    code = "capacity_exceeded"
    status_code = 403
    default_message = "Group is full."


class ForbiddenError(ClassAlarmError):
    """Raised when a non-member attempts a member-only action."""

    code = "forbidden"
    status_code = 403
    default_message = "Only group members can do this."


class RateLimitedError(ClassAlarmError):
    """Raised when a broadcast arrives inside the group's cooldown window."""

    code = "rate_limited"
    status_code = 429

    def __init__(self, retry_after_seconds: int, message: str | None = None) -> None:
        self.retry_after_seconds = retry_after_seconds
        super().__init__(message or f"Please wait {retry_after_seconds}s before the next alarm.")

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["retryAfterSeconds"] = self.retry_after_seconds
        return data


class DependencyFailureError(ClassAlarmError):
    """Raised when the store or push collaborator fails or times out."""

    code = "dependency_failure"
    status_code = 503
    default_message = "Service temporarily unavailable, please try again later."
