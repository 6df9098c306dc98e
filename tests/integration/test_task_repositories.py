"""SQLAlchemy repositories against in-memory SQLite (aiosqlite)."""

from datetime import date

import pytest

from taskhub.application.dtos import PageRequest, TaskFilters
from taskhub.domain.entities import SubTaskEntity, TaskCommentEntity, TaskEntity, TaskLogEntity
from taskhub.domain.enums import Role, TaskLogAction, TaskPriority, TaskStatus
from taskhub.infrastructure.persistence.models import TaskLog
from taskhub.shared.utils import utc_now
from taskhub.infrastructure.persistence.repositories import (
    SubTaskRepository,
    TaskCommentRepository,
    TaskLogRepository,
    TaskRepository,
    UserRepository,
)


@pytest.fixture
async def users(db_session, seeded_users):
    repo = UserRepository(db_session)
    return {key: await repo.get_by_id(user_id) for key, user_id in seeded_users.items()}


async def test_user_repo_maps_role(db_session, users) -> None:
    assert users["admin"].role is Role.ADMIN
    assert users["owner"].role is Role.CUSTOMER
    assert await UserRepository(db_session).get_by_id("missing") is None


async def test_task_save_assigns_id_and_timestamps(db_session, users) -> None:
    repo = TaskRepository(db_session)
    saved = await repo.save(
        TaskEntity(
            id=None,
            title="Task 1",
            created_by=users["admin"],
            priority=TaskPriority.HIGH,
            due_date=date(2025, 12, 30),
            tags={"backend", "api"},
            assignee=users["owner"],
        )
    )

    assert saved.id
    assert saved.created_at is not None and saved.created_at.tzinfo is not None
    assert saved.tags == {"backend", "api"}
    assert saved.assignee.id == users["owner"].id

    loaded = await repo.get_by_id(saved.id)
    assert loaded.title == "Task 1"
    assert loaded.priority is TaskPriority.HIGH
    assert loaded.due_date == date(2025, 12, 30)
    assert loaded.created_by.id == users["admin"].id


async def test_task_update_syncs_tags_and_soft_delete(db_session, users) -> None:
    repo = TaskRepository(db_session)
    task = await repo.save(TaskEntity(id=None, title="T", created_by=users["admin"], tags={"a", "b"}))

    task.apply_changes(tags={"b", "c"})
    task.change_status(TaskStatus.DONE)
    updated = await repo.save(task)
    assert updated.tags == {"b", "c"}
    assert updated.status is TaskStatus.DONE


    updated.soft_delete(utc_now())
    deleted = await repo.save(updated)
    assert deleted.active is False
    assert deleted.deleted_at is not None
    assert (await repo.get_by_id(task.id)).active is False


async def test_task_query_filters_and_paging(db_session, users) -> None:
    repo = TaskRepository(db_session)
    admin, owner = users["admin"], users["owner"]
    await repo.save(TaskEntity(id=None, title="Fix login bug", created_by=admin, tags={"backend"}, priority=TaskPriority.URGENT))
    await repo.save(TaskEntity(id=None, title="Write docs", created_by=owner, priority=TaskPriority.LOW))
    await repo.save(TaskEntity(id=None, title="Deploy", created_by=admin, assignee=owner, description="Release the login page"))
    gone = await repo.save(TaskEntity(id=None, title="Old login work", created_by=admin))

    gone.soft_delete(utc_now())
    await repo.save(gone)

    by_text = await repo.query(TaskFilters(q="LOGIN"), PageRequest())
    assert {t.title for t in by_text.items} == {"Fix login bug", "Deploy"}

    by_tag = await repo.query(TaskFilters(tag="backend"), PageRequest())
    assert [t.title for t in by_tag.items] == ["Fix login bug"]

    members = await repo.query(TaskFilters(member_id=owner.id), PageRequest())
    assert {t.title for t in members.items} == {"Write docs", "Deploy"}

    with_deleted = await repo.query(TaskFilters(include_deleted=True), PageRequest())
    assert with_deleted.total == 4

    by_priority = await repo.query(
        TaskFilters(), PageRequest(sort="priority", descending=True, size=2)
    )
    assert by_priority.total == 3
    assert by_priority.total_pages == 2
    assert [t.priority for t in by_priority.items] == [TaskPriority.URGENT, TaskPriority.MEDIUM]


async def test_subtask_repo_lists_active_only(db_session, users) -> None:
    task = await TaskRepository(db_session).save(TaskEntity(id=None, title="T", created_by=users["admin"]))
    repo = SubTaskRepository(db_session)
    keep = await repo.save(SubTaskEntity(id=None, task_id=task.id, title="keep"))
    drop = await repo.save(SubTaskEntity(id=None, task_id=task.id, title="drop"))

    drop.soft_delete(utc_now())
    await repo.save(drop)

    assert [s.id for s in await repo.list_active_by_task(task.id)] == [keep.id]
    assert (await repo.get_by_id(drop.id)).active is False


async def test_comments_oldest_first_and_logs_newest_first(db_session, users) -> None:
    task = await TaskRepository(db_session).save(TaskEntity(id=None, title="T", created_by=users["admin"]))
    comments = TaskCommentRepository(db_session)
    logs = TaskLogRepository(db_session)

    c1 = await comments.save(TaskCommentEntity(id=None, task_id=task.id, author=users["owner"], content="one"))
    c2 = await comments.save(TaskCommentEntity(id=None, task_id=task.id, author=users["admin"], content="two"))
    l1 = await logs.save(TaskLogEntity(id=None, task_id=task.id, actor_id=users["admin"].id, action=TaskLogAction.CREATED))
    l2 = await logs.save(TaskLogEntity(id=None, task_id=task.id, actor_id=users["admin"].id, action=TaskLogAction.COMMENT_ADDED, field_name="comment", new_value=c1.id))

    assert c1.author.email == "owner@example.com"
    assert [c.id for c in await comments.list_by_task_oldest_first(task.id)] == [c1.id, c2.id]
    assert [e.id for e in await logs.list_by_task_newest_first(task.id)] == [l2.id, l1.id]


async def test_task_log_rows_are_immutable(db_session, users) -> None:
    task = await TaskRepository(db_session).save(TaskEntity(id=None, title="T", created_by=users["admin"]))
    entry = await TaskLogRepository(db_session).save(
        TaskLogEntity(id=None, task_id=task.id, actor_id=users["admin"].id, action=TaskLogAction.CREATED)
    )
    row = await db_session.get(TaskLog, entry.id)

    row.new_value = "tampered"
    with pytest.raises(ValueError, match="immutable"):
        await db_session.flush()
