"""Shared loading and gating steps for task use cases.

Every operation follows the same order: resolve the actor, build its
policy, load the target, then check the policy against the loaded task.
"""

from __future__ import annotations

from taskhub.application.interfaces.repositories import ITaskRepository
from taskhub.application.services.actor_resolver import ActorResolver
from taskhub.application.services.task_audit_service import TaskAuditService
from taskhub.domain.entities import TaskEntity, UserEntity
from taskhub.domain.exceptions import ResourceNotFoundException
from taskhub.domain.policies import AccessPolicy


class TaskUseCaseBase:
    """Holds the collaborators every task use case needs."""

    def __init__(
        self,
        actor_resolver: ActorResolver,
        task_repo: ITaskRepository,
        audit: TaskAuditService,
    ) -> None:
        self.actor_resolver = actor_resolver
        self.task_repo = task_repo
        self.audit = audit

    async def _resolve(self, actor_id: str) -> tuple[UserEntity, AccessPolicy]:
        actor = await self.actor_resolver.resolve(actor_id)
        return actor, AccessPolicy.for_actor(actor)

    async def _load_task(self, task_id: str, *, active_only: bool) -> TaskEntity:
        """Return the task; soft-deleted tasks count as missing when active_only."""
        task = await self.task_repo.get_by_id(task_id)
        if task is None or (active_only and not task.active):
            raise ResourceNotFoundException("task", task_id)
        return task

    async def _load_accessible_task(
        self,
        policy: AccessPolicy,
        task_id: str,
        action: str,
        *,
        resource: str = "task",
        active_only: bool = False,
    ) -> TaskEntity:
        task = await self._load_task(task_id, active_only=active_only)
        policy.require_access(task, resource, action)
        return task
