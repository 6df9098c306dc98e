"""ORM models. Importing this package registers every table on Base.metadata."""

from taskhub.infrastructure.persistence.models.activity import TaskComment, TaskLog
from taskhub.infrastructure.persistence.models.task import SubTask, Task, TaskTag
from taskhub.infrastructure.persistence.models.user import User

__all__ = [
    "SubTask",
    "Task",
    "TaskComment",
    "TaskLog",
    "TaskTag",
    "User",
]
