"""Domain entities.

Pure domain models; no ORM or persistence concerns.
"""

from taskhub.domain.entities.activity import TaskCommentEntity, TaskLogEntity
from taskhub.domain.entities.task import SubTaskEntity, TaskEntity
from taskhub.domain.entities.user import UserEntity

__all__ = [
    "SubTaskEntity",
    "TaskCommentEntity",
    "TaskEntity",
    "TaskLogEntity",
    "UserEntity",
]
