"""Application DTOs: commands, read-models, and query objects."""

from taskhub.application.dtos.notification import NotificationKind, TaskNotification
from taskhub.application.dtos.query import Page, PageRequest, TaskFilters
from taskhub.application.dtos.task import (
    CommentResult,
    CreateCommentCommand,
    CreateSubTaskCommand,
    CreateTaskCommand,
    PatchSubTaskCommand,
    PatchTaskCommand,
    SubTaskResult,
    TaskDetailResult,
    TaskLogResult,
    TaskResult,
    UserRef,
)

__all__ = [
    "CommentResult",
    "CreateCommentCommand",
    "CreateSubTaskCommand",
    "CreateTaskCommand",
    "NotificationKind",
    "Page",
    "PageRequest",
    "PatchSubTaskCommand",
    "PatchTaskCommand",
    "SubTaskResult",
    "TaskDetailResult",
    "TaskFilters",
    "TaskLogResult",
    "TaskNotification",
    "TaskResult",
    "UserRef",
]
