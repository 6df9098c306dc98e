"""Comment and audit log entities. Both are immutable once stored."""

from dataclasses import dataclass
from datetime import datetime

from taskhub.domain.entities.user import UserEntity
from taskhub.domain.enums import TaskLogAction
from taskhub.domain.exceptions import ValidationException


@dataclass
class TaskCommentEntity:
    """Comment on a task. id and created_at are assigned by the comment store."""

    id: str | None
    task_id: str
    author: UserEntity
    content: str
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.task_id:
            raise ValidationException("Comment must belong to a task", field="task_id")
        if not self.content or not self.content.strip():
            raise ValidationException("Comment content is required", field="content")


@dataclass(frozen=True)
class TaskLogEntity:
    """Audit log entry: who did what to which task field, and when.

    Append-only. old_value/new_value are stored as strings (or None).
    """

    id: str | None
    task_id: str
    actor_id: str
    action: TaskLogAction
    field_name: str | None = None
    old_value: str | None = None
    new_value: str | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.task_id:
            raise ValidationException("Log entry must reference a task", field="task_id")
        if not self.actor_id:
            raise ValidationException("Log entry must reference an actor", field="actor_id")
