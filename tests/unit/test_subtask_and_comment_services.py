"""SubTaskService and TaskCommentService: access gating, cross-task guard, audit entries."""

import pytest

from taskhub.application.dtos import (
    CreateCommentCommand,
    CreateSubTaskCommand,
    PatchSubTaskCommand,
)
from taskhub.domain.enums import Role, TaskLogAction
from taskhub.domain.exceptions import AuthorizationException, ResourceNotFoundException
from tests.fakes import build_world, make_user

ADMIN = make_user("admin", Role.ADMIN)
OWNER = make_user("owner")
ASSIGNEE = make_user("assignee")
OUTSIDER = make_user("outsider")


@pytest.fixture
def world():
    return build_world(ADMIN, OWNER, ASSIGNEE, OUTSIDER)


async def test_owner_creates_subtask(world) -> None:
    task = await world.seed_task(OWNER)

    sub = await world.subtask_service.create_subtask("owner", task.id, CreateSubTaskCommand("Draft"))

    assert sub.id
    assert sub.task_id == task.id
    assert sub.done is False
    assert sub.active is True
    entries = world.logs.for_task(task.id)
    assert [e.action for e in entries] == [TaskLogAction.SUBTASK_CREATED]
    assert entries[0].new_value == sub.id


async def test_assignee_may_work_on_subtasks(world) -> None:
    task = await world.seed_task(OWNER, assignee=ASSIGNEE)
    sub = await world.subtask_service.create_subtask("assignee", task.id, CreateSubTaskCommand("Do it"))
    patched = await world.subtask_service.patch_subtask(
        "assignee", task.id, sub.id, PatchSubTaskCommand(done=True)
    )
    assert patched.done is True


async def test_outsider_cannot_create_subtask(world) -> None:
    task = await world.seed_task(OWNER)
    with pytest.raises(AuthorizationException) as exc_info:
        await world.subtask_service.create_subtask("outsider", task.id, CreateSubTaskCommand("x"))
    assert exc_info.value.details == {"resource": "subtask", "action": "create"}
    assert world.subtasks.rows == {}


async def test_subtask_on_missing_task_is_not_found(world) -> None:
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await world.subtask_service.create_subtask("owner", "t-missing", CreateSubTaskCommand("x"))
    assert exc_info.value.details["resource_type"] == "task"


async def test_patch_subtask_logs_each_changed_field(world) -> None:
    task = await world.seed_task(OWNER)
    sub = await world.subtask_service.create_subtask("owner", task.id, CreateSubTaskCommand("Draft"))

    await world.subtask_service.patch_subtask(
        "owner", task.id, sub.id, PatchSubTaskCommand(title="Final", done=True)
    )

    updates = [e for e in world.logs.for_task(task.id) if e.action is TaskLogAction.SUBTASK_UPDATED]
    assert [e.field_name for e in updates] == [
        f"subtask[{sub.id}].title",
        f"subtask[{sub.id}].done",
    ]
    assert updates[0].old_value == "Draft"
    assert updates[1].new_value == "true"


async def test_patch_subtask_without_changes_writes_nothing(world) -> None:
    task = await world.seed_task(OWNER)
    sub = await world.subtask_service.create_subtask("owner", task.id, CreateSubTaskCommand("Draft"))
    before = len(world.logs.entries)

    await world.subtask_service.patch_subtask("owner", task.id, sub.id, PatchSubTaskCommand())

    assert len(world.logs.entries) == before


async def test_subtask_of_another_task_is_not_found(world) -> None:
    """Cross-task guard: a real subtask addressed through the wrong task is missing."""
    task_a = await world.seed_task(OWNER, title="A")
    task_b = await world.seed_task(OWNER, title="B")
    sub = await world.subtask_service.create_subtask("owner", task_a.id, CreateSubTaskCommand("a1"))

    with pytest.raises(ResourceNotFoundException) as exc_info:
        await world.subtask_service.patch_subtask(
            "owner", task_b.id, sub.id, PatchSubTaskCommand(done=True)
        )
    assert exc_info.value.details["resource_type"] == "subtask"
    assert world.subtasks.rows[sub.id].done is False


async def test_soft_delete_subtask_twice(world) -> None:
    task = await world.seed_task(OWNER)
    sub = await world.subtask_service.create_subtask("owner", task.id, CreateSubTaskCommand("tmp"))

    deleted = await world.subtask_service.soft_delete_subtask("owner", task.id, sub.id)

    assert deleted.active is False
    assert deleted.deleted_at is not None
    with pytest.raises(ResourceNotFoundException):
        await world.subtask_service.soft_delete_subtask("owner", task.id, sub.id)
    actions = [e.action for e in world.logs.for_task(task.id)]
    assert actions.count(TaskLogAction.SUBTASK_DELETED) == 1


async def test_owner_adds_comment(world) -> None:
    task = await world.seed_task(OWNER)

    comment = await world.comment_service.add_comment(
        "owner", task.id, CreateCommentCommand("  Looks good  ")
    )

    assert comment.author.id == "owner"
    assert comment.content == "Looks good"
    entries = world.logs.for_task(task.id)
    assert [e.action for e in entries] == [TaskLogAction.COMMENT_ADDED]
    assert entries[0].new_value == comment.id


async def test_outsider_cannot_comment(world) -> None:
    task = await world.seed_task(OWNER)
    with pytest.raises(AuthorizationException):
        await world.comment_service.add_comment("outsider", task.id, CreateCommentCommand("hi"))
    assert world.comments.rows == []


async def test_admin_can_comment_on_any_task(world) -> None:
    task = await world.seed_task(OWNER)
    comment = await world.comment_service.add_comment("admin", task.id, CreateCommentCommand("ok"))
    assert comment.author.id == "admin"
