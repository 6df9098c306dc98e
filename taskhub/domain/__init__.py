"""Domain layer: entities, value objects, enums, policies, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from taskhub.domain.entities import (
    SubTaskEntity,
    TaskCommentEntity,
    TaskEntity,
    TaskLogEntity,
    UserEntity,
)
from taskhub.domain.enums import Role, TaskLogAction, TaskPriority, TaskStatus
from taskhub.domain.exceptions import (
    AuditLogWriteError,
    AuthorizationException,
    ResourceNotFoundException,
    TaskHubException,
    ValidationException,
)
from taskhub.domain.policies import AccessPolicy
from taskhub.domain.value_objects import FieldChange

__all__ = [
    # Entities
    "SubTaskEntity",
    "TaskCommentEntity",
    "TaskEntity",
    "TaskLogEntity",
    "UserEntity",
    # Enums
    "Role",
    "TaskLogAction",
    "TaskPriority",
    "TaskStatus",
    # Exceptions
    "AuditLogWriteError",
    "AuthorizationException",
    "ResourceNotFoundException",
    "TaskHubException",
    "ValidationException",
    # Policy and value objects
    "AccessPolicy",
    "FieldChange",
]
