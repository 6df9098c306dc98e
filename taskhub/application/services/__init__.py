"""Application services shared by the task use cases."""

from taskhub.application.services.actor_resolver import ActorResolver
from taskhub.application.services.notification_dispatcher import NotificationDispatcher
from taskhub.application.services.task_audit_service import TaskAuditService, stringify_value

__all__ = [
    "ActorResolver",
    "NotificationDispatcher",
    "TaskAuditService",
    "stringify_value",
]
