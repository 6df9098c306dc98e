"""AccessPolicy: role and ownership rules."""

import pytest

from taskhub.domain.entities import TaskEntity, UserEntity
from taskhub.domain.enums import Role
from taskhub.domain.exceptions import AuthorizationException
from taskhub.domain.policies import AccessPolicy

ADMIN = UserEntity(id="admin", email="a@example.com", role=Role.ADMIN)
CREATOR = UserEntity(id="creator", email="c@example.com", role=Role.CUSTOMER)
ASSIGNEE = UserEntity(id="assignee", email="s@example.com", role=Role.CUSTOMER)
OUTSIDER = UserEntity(id="outsider", email="o@example.com", role=Role.CUSTOMER)


def _task(assignee: UserEntity | None = ASSIGNEE) -> TaskEntity:
    return TaskEntity(id="t1", title="Task", created_by=CREATOR, assignee=assignee)


def test_admin_can_administer_and_access_any_task() -> None:
    policy = AccessPolicy.for_actor(ADMIN)
    assert policy.can_administer()
    assert policy.can_access(_task())
    assert policy.can_access(_task(assignee=None))


@pytest.mark.parametrize("member", [CREATOR, ASSIGNEE])
def test_creator_and_assignee_can_access(member: UserEntity) -> None:
    """A customer who created or is assigned to the task may access it."""
    policy = AccessPolicy.for_actor(member)
    assert policy.can_access(_task())
    assert not policy.can_administer()


def test_outsider_customer_cannot_access() -> None:
    policy = AccessPolicy.for_actor(OUTSIDER)
    assert not policy.can_access(_task())


def test_require_access_raises_forbidden_without_task_fields() -> None:
    """Denial names the resource and action only."""
    policy = AccessPolicy.for_actor(OUTSIDER)
    with pytest.raises(AuthorizationException) as exc_info:
        policy.require_access(_task(), "task", "read")
    exc = exc_info.value
    assert exc.error_code == "FORBIDDEN"
    assert exc.details == {"resource": "task", "action": "read"}
    assert "Task" not in exc.message


def test_require_administer_rejects_customer_even_when_creator() -> None:
    policy = AccessPolicy.for_actor(CREATOR)
    with pytest.raises(AuthorizationException):
        policy.require_administer("task", "delete")


def test_policy_is_pure() -> None:
    """Same inputs give the same answer and the task is not touched."""
    task = _task()
    policy = AccessPolicy.for_actor(OUTSIDER)
    before = (task.created_by, task.assignee, task.status)
    assert policy.can_access(task) is policy.can_access(task)
    assert (task.created_by, task.assignee, task.status) == before
