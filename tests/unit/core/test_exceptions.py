"""Unit tests for the error taxonomy."""

from classalarm.core.exceptions import (
    CapacityExceededError,
    ClassAlarmError,
    DependencyFailureError,
    DuplicateCodeError,
    ForbiddenError,
    GroupNotFoundError,
    InvalidInputError,
    RateLimitedError,
    UnauthenticatedError,
)


def test_status_codes():
    assert UnauthenticatedError().status_code == 401
    assert InvalidInputError().status_code == 400
    assert GroupNotFoundError().status_code == 404
    assert DuplicateCodeError().status_code == 409
    assert CapacityExceededError().status_code == 403
    assert ForbiddenError().status_code == 403
    assert RateLimitedError(10).status_code == 429
    assert DependencyFailureError().status_code == 503


def test_all_errors_share_base():
    for error in (GroupNotFoundError(), RateLimitedError(1), DependencyFailureError()):
        assert isinstance(error, ClassAlarmError)


def test_rate_limited_carries_retry_after():
    error = RateLimitedError(retry_after_seconds=42)

    assert error.retry_after_seconds == 42
    assert "42" in error.message
    assert error.to_dict() == {
        "code": "rate_limited",
        "message": error.message,
        "retryAfterSeconds": 42,
    }


def test_custom_message_overrides_default():
    error = InvalidInputError("Group code is required.")

    assert str(error) == "Group code is required."
    assert error.to_dict() == {"code": "invalid_input", "message": "Group code is required."}
