"""Application ports: repository and service protocols."""

from taskhub.application.interfaces.repositories import (
    ISubTaskRepository,
    ITaskCommentRepository,
    ITaskLogRepository,
    ITaskRepository,
    IUserRepository,
)
from taskhub.application.interfaces.services import INotificationService

__all__ = [
    "INotificationService",
    "ISubTaskRepository",
    "ITaskCommentRepository",
    "ITaskLogRepository",
    "ITaskRepository",
    "IUserRepository",
]
