"""Access policy: who may do what to a task.

Built once per operation from the acting user and consulted for every
check that operation needs. Pure: depends only on the actor's id and role
and the task's creator and assignee.
"""

from dataclasses import dataclass

from taskhub.domain.entities.task import TaskEntity
from taskhub.domain.entities.user import UserEntity
from taskhub.domain.enums import Role
from taskhub.domain.exceptions import AuthorizationException


@dataclass(frozen=True)
class AccessPolicy:
    """Role and ownership rules for one actor.

    ADMIN: every operation on every task.
    CUSTOMER: read, comment, subtask and status operations on tasks they
    created or are assigned to. Creating, patching, deleting and assigning
    tasks is ADMIN-only.
    """

    actor_id: str
    role: Role

    @classmethod
    def for_actor(cls, actor: UserEntity) -> "AccessPolicy":
        return cls(actor_id=actor.id, role=actor.role)

    def can_administer(self) -> bool:
        """Return whether the actor may create, patch, delete and assign tasks."""
        return self.role is Role.ADMIN

    def can_access(self, task: TaskEntity) -> bool:
        """Return whether the actor may read and work on the given task."""
        if self.can_administer():
            return True
        return task.is_member(self.actor_id)

    def require_administer(self, resource: str, action: str) -> None:
        """Raise AuthorizationException unless the actor is an administrator."""
        if not self.can_administer():
            raise AuthorizationException(resource=resource, action=action)

    def require_access(self, task: TaskEntity, resource: str, action: str) -> None:
        """Raise AuthorizationException unless the actor may access the task."""
        if not self.can_access(task):
            raise AuthorizationException(resource=resource, action=action)
