"""DTO for task notifications handed to the notification sender."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NotificationKind(str, Enum):
    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_STATUS_CHANGED = "TASK_STATUS_CHANGED"


@dataclass(frozen=True)
class TaskNotification:
    """Assignment or status change, sent to the recipients once it is committed."""

    kind: NotificationKind
    task_id: str
    actor_id: str
    recipient_ids: tuple[str, ...]
    payload: dict[str, Any] = field(default_factory=dict)
