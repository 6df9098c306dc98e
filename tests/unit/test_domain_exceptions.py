"""Tests for domain exceptions (error_code, message, details)."""

from taskhub.domain.exceptions import (
    AuditLogWriteError,
    AuthorizationException,
    ResourceNotFoundException,
    TaskHubException,
    ValidationException,
)


def test_taskhub_exception_default_error_code() -> None:
    """Base TaskHubException uses class name as error_code when not provided."""
    exc = TaskHubException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "TaskHubException"
    assert exc.details == {}


def test_to_dict() -> None:
    exc = TaskHubException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"key": "value"}}


def test_validation_exception() -> None:
    exc = ValidationException("Invalid format", field="title")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "title"}


def test_authorization_exception_with_resource_and_action() -> None:
    exc = AuthorizationException(resource="task", action="delete")
    assert exc.error_code == "FORBIDDEN"
    assert exc.message == "FORBIDDEN"
    assert str(exc) == "FORBIDDEN"
    assert exc.details == {"resource": "task", "action": "delete"}


def test_authorization_exception_default_message() -> None:
    exc = AuthorizationException()
    assert exc.message == "FORBIDDEN"
    assert exc.details == {}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("task", "t-404")
    assert exc.error_code == "NOT_FOUND"
    assert exc.details == {"resource_type": "task", "resource_id": "t-404"}


def test_audit_log_write_error_is_distinct_from_business_errors() -> None:
    exc = AuditLogWriteError("t1", "CREATED", "disk full")
    assert exc.error_code == "AUDIT_LOG_WRITE_FAILED"
    assert exc.details["reason"] == "disk full"
    assert not isinstance(exc, (ValidationException, AuthorizationException))
