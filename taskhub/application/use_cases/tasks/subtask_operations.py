"""Subtask operations: create, patch and soft delete within a task."""

from __future__ import annotations

from taskhub.application.dtos.task import (
    CreateSubTaskCommand,
    PatchSubTaskCommand,
    SubTaskResult,
)
from taskhub.application.interfaces.repositories import ISubTaskRepository, ITaskRepository
from taskhub.application.services.actor_resolver import ActorResolver
from taskhub.application.services.task_audit_service import TaskAuditService
from taskhub.application.use_cases.tasks.task_access import TaskUseCaseBase
from taskhub.domain.entities import SubTaskEntity
from taskhub.domain.enums import TaskLogAction
from taskhub.domain.exceptions import ResourceNotFoundException
from taskhub.shared.telemetry import traced
from taskhub.shared.utils import utc_now


class SubTaskService(TaskUseCaseBase):
    """Subtask mutations, gated by access to the parent task."""

    def __init__(
        self,
        actor_resolver: ActorResolver,
        task_repo: ITaskRepository,
        subtask_repo: ISubTaskRepository,
        audit: TaskAuditService,
    ) -> None:
        super().__init__(actor_resolver, task_repo, audit)
        self.subtask_repo = subtask_repo

    async def _load_subtask(self, task_id: str, subtask_id: str) -> SubTaskEntity:
        """Active subtask of the given task. A subtask of another task is reported as missing."""
        subtask = await self.subtask_repo.get_by_id(subtask_id)
        if subtask is None or not subtask.active or not subtask.belongs_to(task_id):
            raise ResourceNotFoundException("subtask", subtask_id)
        return subtask

    @traced("task.subtask.create")
    async def create_subtask(
        self, actor_id: str, task_id: str, command: CreateSubTaskCommand
    ) -> SubTaskResult:
        actor, policy = await self._resolve(actor_id)
        task = await self._load_accessible_task(policy, task_id, "create", resource="subtask")
        subtask = SubTaskEntity(
            id=None,
            task_id=task.id,
            title=command.title.strip() if command.title else command.title,
        )
        saved = await self.subtask_repo.save(subtask)
        await self.audit.record_subtask(task, actor, TaskLogAction.SUBTASK_CREATED, saved)
        return SubTaskResult.from_entity(saved)

    @traced("task.subtask.patch")
    async def patch_subtask(
        self,
        actor_id: str,
        task_id: str,
        subtask_id: str,
        command: PatchSubTaskCommand,
    ) -> SubTaskResult:
        """Apply non-None title/done; one SUBTASK_UPDATED entry per changed field."""
        actor, policy = await self._resolve(actor_id)
        task = await self._load_accessible_task(policy, task_id, "update", resource="subtask")
        subtask = await self._load_subtask(task.id, subtask_id)

        changes = subtask.apply_changes(title=command.title, done=command.done)
        if not changes:
            return SubTaskResult.from_entity(subtask)
        saved = await self.subtask_repo.save(subtask)
        await self.audit.record_subtask_changes(task, actor, saved, changes)
        return SubTaskResult.from_entity(saved)

    @traced("task.subtask.soft_delete")
    async def soft_delete_subtask(
        self, actor_id: str, task_id: str, subtask_id: str
    ) -> SubTaskResult:
        actor, policy = await self._resolve(actor_id)
        task = await self._load_accessible_task(policy, task_id, "delete", resource="subtask")
        subtask = await self._load_subtask(task.id, subtask_id)
        subtask.soft_delete(utc_now())
        saved = await self.subtask_repo.save(subtask)
        await self.audit.record_subtask(task, actor, TaskLogAction.SUBTASK_DELETED, saved)
        return SubTaskResult.from_entity(saved)
