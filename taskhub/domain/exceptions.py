"""Domain exceptions for the task tracker.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class TaskHubException(Exception):
    """Base exception for all taskhub application errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskHubException):
    """Raised when input validation fails (e.g. blank title, invalid page size)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthorizationException(TaskHubException):
    """Raised when the actor's role or ownership does not allow the operation.

    Carries only the resource type and the attempted action; never any
    field of the protected task.
    """

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "FORBIDDEN",
    ) -> None:
        """Initialize with optional resource and action.

        Args:
            resource: Optional resource type (e.g. 'task', 'subtask').
            action: Optional action that was attempted (e.g. 'create', 'read').
            message: Human-readable message; resource and action go in details.
        """
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "FORBIDDEN", details)


class ResourceNotFoundException(TaskHubException):
    """Raised when a requested resource is not found.

    Also raised when a subtask does not belong to the task named in the
    request, and for soft-deleted rows where the operation needs an active one.
    """

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'user', 'task', 'subtask').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class AuditLogWriteError(TaskHubException):
    """Audit entry could not be persisted.

    Reliability failure, not a business-rule failure: the audit logger logs
    it and lets the primary mutation complete.
    """

    def __init__(self, task_id: str | None, action: str, reason: str) -> None:
        """Initialize with the task, action, and underlying failure.

        Args:
            task_id: Task the entry was being written for.
            action: TaskLogAction value of the lost entry.
            reason: String form of the store error.
        """
        super().__init__(
            f"Failed to write audit entry {action} for task {task_id}",
            "AUDIT_LOG_WRITE_FAILED",
            {"task_id": task_id, "action": action, "reason": reason},
        )
