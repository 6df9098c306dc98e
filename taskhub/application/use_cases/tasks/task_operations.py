"""Task operations: create, patch, delete, assign, status, detail and list."""

from __future__ import annotations

from dataclasses import replace

from taskhub.application.dtos.query import Page, PageRequest, TaskFilters
from taskhub.application.dtos.task import (
    CommentResult,
    CreateTaskCommand,
    PatchTaskCommand,
    SubTaskResult,
    TaskDetailResult,
    TaskLogResult,
    TaskResult,
)
from taskhub.application.interfaces.repositories import (
    ISubTaskRepository,
    ITaskCommentRepository,
    ITaskLogRepository,
    ITaskRepository,
)
from taskhub.application.services.actor_resolver import ActorResolver
from taskhub.application.services.notification_dispatcher import NotificationDispatcher
from taskhub.application.services.task_audit_service import TaskAuditService
from taskhub.application.use_cases.tasks.task_access import TaskUseCaseBase
from taskhub.domain.entities import TaskEntity
from taskhub.domain.enums import TaskLogAction, TaskPriority, TaskStatus
from taskhub.shared.telemetry import get_logger, traced
from taskhub.shared.utils import utc_now

logger = get_logger(__name__)


class TaskService(TaskUseCaseBase):
    """Authorization-gated task mutations and reads.

    Create, patch, delete and assign are ADMIN-only and check the policy
    before touching the task store. Status changes and detail reads are
    open to the task's creator and assignee.
    """

    def __init__(
        self,
        actor_resolver: ActorResolver,
        task_repo: ITaskRepository,
        subtask_repo: ISubTaskRepository,
        comment_repo: ITaskCommentRepository,
        log_repo: ITaskLogRepository,
        audit: TaskAuditService,
        notifications: NotificationDispatcher,
    ) -> None:
        super().__init__(actor_resolver, task_repo, audit)
        self.subtask_repo = subtask_repo
        self.comment_repo = comment_repo
        self.log_repo = log_repo
        self.notifications = notifications

    @traced("task.create")
    async def create_task(self, actor_id: str, command: CreateTaskCommand) -> TaskResult:
        """Create an active TODO task. Logs CREATED, plus ASSIGNED when an assignee is given."""
        actor, policy = await self._resolve(actor_id)
        policy.require_administer("task", "create")

        assignee = None
        if command.assignee_id is not None:
            assignee = await self.actor_resolver.resolve_user(command.assignee_id)

        task = TaskEntity(
            id=None,
            title=command.title.strip() if command.title else command.title,
            created_by=actor,
            description=(command.description or "").strip() or None,
            priority=command.priority or TaskPriority.MEDIUM,
            status=TaskStatus.TODO,
            due_date=command.due_date,
            tags=set(command.tags or ()),
            assignee=assignee,
        )
        saved = await self.task_repo.save(task)
        await self.audit.record(saved, actor, TaskLogAction.CREATED)
        if assignee is not None:
            await self.audit.record(
                saved, actor, TaskLogAction.ASSIGNED, "assignee", None, assignee.id
            )
        logger.info("Task %s created by %s", saved.id, actor.id)
        if assignee is not None:
            self.notifications.task_assigned(saved, actor)
        return TaskResult.from_entity(saved)

    @traced("task.patch")
    async def patch_task(
        self, actor_id: str, task_id: str, command: PatchTaskCommand
    ) -> TaskResult:
        """Apply the sent fields to an active task; one UPDATED entry per changed field."""
        actor, policy = await self._resolve(actor_id)
        policy.require_administer("task", "update")
        task = await self._load_task(task_id, active_only=True)
        if command.is_empty():
            return TaskResult.from_entity(task)

        changes = task.apply_changes(
            title=command.title,
            description=command.description,
            priority=command.priority,
            due_date=command.due_date,
            tags=command.tags,
        )
        if not changes:
            return TaskResult.from_entity(task)
        saved = await self.task_repo.save(task)
        await self.audit.record_changes(saved, actor, TaskLogAction.UPDATED, changes)
        return TaskResult.from_entity(saved)

    @traced("task.soft_delete")
    async def soft_delete_task(self, actor_id: str, task_id: str) -> TaskResult:
        """Mark an active task deleted. A second call finds no active task and fails NOT_FOUND."""
        actor, policy = await self._resolve(actor_id)
        policy.require_administer("task", "delete")
        task = await self._load_task(task_id, active_only=True)
        task.soft_delete(utc_now())
        saved = await self.task_repo.save(task)
        await self.audit.record(saved, actor, TaskLogAction.DELETED)
        logger.info("Task %s deleted by %s", saved.id, actor.id)
        return TaskResult.from_entity(saved)

    @traced("task.assign")
    async def assign_task(self, actor_id: str, task_id: str, assignee_id: str) -> TaskResult:
        actor, policy = await self._resolve(actor_id)
        policy.require_administer("task", "assign")
        task = await self._load_task(task_id, active_only=False)
        assignee = await self.actor_resolver.resolve_user(assignee_id)

        change = task.assign_to(assignee)
        if change is None:
            return TaskResult.from_entity(task)
        saved = await self.task_repo.save(task)
        await self.audit.record(
            saved,
            actor,
            TaskLogAction.ASSIGNED,
            change.field_name,
            change.old_value,
            change.new_value,
        )
        self.notifications.task_assigned(saved, actor)
        return TaskResult.from_entity(saved)

    @traced("task.update_status")
    async def update_status(
        self, actor_id: str, task_id: str, status: TaskStatus
    ) -> TaskResult:
        """Set status on an active task the actor may access. Any transition is allowed."""
        actor, policy = await self._resolve(actor_id)
        task = await self._load_accessible_task(
            policy, task_id, "update_status", active_only=True
        )
        change = task.change_status(status)
        if change is None:
            return TaskResult.from_entity(task)
        saved = await self.task_repo.save(task)
        await self.audit.record(
            saved,
            actor,
            TaskLogAction.STATUS_CHANGED,
            change.field_name,
            change.old_value,
            change.new_value,
        )
        self.notifications.status_changed(saved, actor, change)
        return TaskResult.from_entity(saved)

    @traced("task.get_detail")
    async def get_task_detail(self, actor_id: str, task_id: str) -> TaskDetailResult:
        """Task with active subtasks, comments oldest first and logs newest first."""
        _actor, policy = await self._resolve(actor_id)
        task = await self._load_accessible_task(policy, task_id, "read")
        subtasks = await self.subtask_repo.list_active_by_task(task.id)
        comments = await self.comment_repo.list_by_task_oldest_first(task.id)
        logs = await self.log_repo.list_by_task_newest_first(task.id)
        return TaskDetailResult(
            task=TaskResult.from_entity(task),
            subtasks=[SubTaskResult.from_entity(s) for s in subtasks if s.active],
            comments=[CommentResult.from_entity(c) for c in comments],
            logs=[TaskLogResult.from_entity(e) for e in logs],
        )

    @traced("task.list")
    async def list_tasks(
        self,
        actor_id: str,
        filters: TaskFilters | None = None,
        page: PageRequest | None = None,
    ) -> Page[TaskResult]:
        """Page through tasks. Customers only see tasks they created or are assigned to."""
        actor, policy = await self._resolve(actor_id)
        filters = filters or TaskFilters()
        page = page or PageRequest()
        if not policy.can_administer():
            filters = replace(filters, member_id=actor.id)
        result = await self.task_repo.query(filters, page)
        return result.map(TaskResult.from_entity)
