"""SQLAlchemy implementations of the application repository ports."""

from taskhub.infrastructure.persistence.repositories.subtask_repo import SubTaskRepository
from taskhub.infrastructure.persistence.repositories.task_comment_repo import (
    TaskCommentRepository,
)
from taskhub.infrastructure.persistence.repositories.task_log_repo import TaskLogRepository
from taskhub.infrastructure.persistence.repositories.task_repo import TaskRepository
from taskhub.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "SubTaskRepository",
    "TaskCommentRepository",
    "TaskLogRepository",
    "TaskRepository",
    "UserRepository",
]
