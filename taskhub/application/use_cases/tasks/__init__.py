"""Task use cases: the authorization-gated task mutation engine."""

from taskhub.application.use_cases.tasks.comment_operations import TaskCommentService
from taskhub.application.use_cases.tasks.subtask_operations import SubTaskService
from taskhub.application.use_cases.tasks.task_operations import TaskService

__all__ = ["SubTaskService", "TaskCommentService", "TaskService"]
