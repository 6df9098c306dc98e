"""Domain enumerations for the task tracker.

Enums represent fixed sets of domain values (roles, task status and
priority, audit actions). Values are the uppercase names so they read the
same in the database, in audit entries and over the API.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class Role(_ValuesMixin, str, Enum):
    """User role. ADMIN administers every task; CUSTOMER works on own tasks."""

    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"


class TaskStatus(_ValuesMixin, str, Enum):
    """Task status. Ordered for display only; any transition is allowed."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class TaskPriority(_ValuesMixin, str, Enum):
    """Task priority."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class TaskLogAction(_ValuesMixin, str, Enum):
    """Audit action recorded on a task log entry."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    STATUS_CHANGED = "STATUS_CHANGED"
    ASSIGNED = "ASSIGNED"
    DELETED = "DELETED"
    SUBTASK_CREATED = "SUBTASK_CREATED"
    SUBTASK_UPDATED = "SUBTASK_UPDATED"
    SUBTASK_DELETED = "SUBTASK_DELETED"
    COMMENT_ADDED = "COMMENT_ADDED"
