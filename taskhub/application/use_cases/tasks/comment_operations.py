"""Comment operations. Comments are append-only."""

from __future__ import annotations

from taskhub.application.dtos.task import CommentResult, CreateCommentCommand
from taskhub.application.interfaces.repositories import ITaskCommentRepository, ITaskRepository
from taskhub.application.services.actor_resolver import ActorResolver
from taskhub.application.services.task_audit_service import TaskAuditService
from taskhub.application.use_cases.tasks.task_access import TaskUseCaseBase
from taskhub.domain.entities import TaskCommentEntity
from taskhub.domain.enums import TaskLogAction
from taskhub.shared.telemetry import traced


class TaskCommentService(TaskUseCaseBase):
    def __init__(
        self,
        actor_resolver: ActorResolver,
        task_repo: ITaskRepository,
        comment_repo: ITaskCommentRepository,
        audit: TaskAuditService,
    ) -> None:
        super().__init__(actor_resolver, task_repo, audit)
        self.comment_repo = comment_repo

    @traced("task.comment.add")
    async def add_comment(
        self, actor_id: str, task_id: str, command: CreateCommentCommand
    ) -> CommentResult:
        """Add a comment authored by the actor; logs COMMENT_ADDED with the comment id."""
        actor, policy = await self._resolve(actor_id)
        task = await self._load_accessible_task(policy, task_id, "create", resource="comment")
        comment = TaskCommentEntity(
            id=None,
            task_id=task.id,
            author=actor,
            content=command.content.strip() if command.content else command.content,
        )
        saved = await self.comment_repo.save(comment)
        await self.audit.record(
            task, actor, TaskLogAction.COMMENT_ADDED, field_name="comment", new_value=saved.id
        )
        return CommentResult.from_entity(saved)
