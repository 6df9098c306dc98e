"""Domain entities, value objects and enums."""

from datetime import UTC, date, datetime

import pytest

from taskhub.domain.entities import (
    SubTaskEntity,
    TaskCommentEntity,
    TaskEntity,
    TaskLogEntity,
    UserEntity,
)
from taskhub.domain.enums import Role, TaskLogAction, TaskPriority, TaskStatus
from taskhub.domain.exceptions import ValidationException
from taskhub.domain.value_objects import FieldChange, normalize_tags

OWNER = UserEntity(id="u1", email="u1@example.com", role=Role.CUSTOMER)
NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


def _task(**overrides) -> TaskEntity:
    fields = {"id": "t1", "title": "Write report", "created_by": OWNER}
    fields.update(overrides)
    return TaskEntity(**fields)


def test_task_defaults() -> None:
    task = _task()
    assert task.status is TaskStatus.TODO
    assert task.priority is TaskPriority.MEDIUM
    assert task.active is True
    assert task.deleted_at is None
    assert task.tags == set()


def test_task_blank_title_rejected() -> None:
    with pytest.raises(ValidationException) as exc_info:
        _task(title="   ")
    assert exc_info.value.details == {"field": "title"}


@pytest.mark.parametrize(
    ("active", "deleted_at"),
    [(True, NOW), (False, None)],
)
def test_task_soft_delete_invariant(active: bool, deleted_at) -> None:
    """active is False exactly when deleted_at is set."""
    with pytest.raises(ValidationException):
        _task(active=active, deleted_at=deleted_at)


def test_task_tags_are_normalized() -> None:
    task = _task(tags={" backend ", "", "api"})
    assert task.tags == {"backend", "api"}


def test_apply_changes_returns_only_changed_fields() -> None:
    task = _task(priority=TaskPriority.LOW)
    changes = task.apply_changes(
        title="Write report",
        priority=TaskPriority.HIGH,
        due_date=date(2025, 12, 30),
    )
    assert [c.field_name for c in changes] == ["priority", "due_date"]
    assert changes[0] == FieldChange("priority", TaskPriority.LOW, TaskPriority.HIGH)
    assert task.priority is TaskPriority.HIGH
    assert task.due_date == date(2025, 12, 30)


def test_apply_changes_empty_description_clears_it() -> None:
    task = _task(description="old")
    changes = task.apply_changes(description="  ")
    assert task.description is None
    assert changes == [FieldChange("description", "old", None)]


def test_apply_changes_with_nothing_is_empty() -> None:
    assert _task().apply_changes() == []


def test_apply_changes_none_clears_due_date_and_tags() -> None:
    task = _task(due_date=date(2025, 12, 30), tags={"api"})
    changes = task.apply_changes(due_date=None, tags=None)
    assert task.due_date is None
    assert task.tags == set()
    assert [c.field_name for c in changes] == ["due_date", "tags"]


def test_apply_changes_none_title_and_priority_are_skipped() -> None:
    task = _task(priority=TaskPriority.HIGH, due_date=date(2025, 12, 30))
    assert task.apply_changes(title=None, priority=None) == []
    assert task.priority is TaskPriority.HIGH
    assert task.due_date == date(2025, 12, 30)


def test_change_status_same_value_is_none() -> None:
    task = _task()
    assert task.change_status(TaskStatus.TODO) is None
    change = task.change_status(TaskStatus.DONE)
    assert change == FieldChange("status", TaskStatus.TODO, TaskStatus.DONE)
    # Any transition is allowed, including back to TODO.
    assert task.change_status(TaskStatus.TODO) is not None


def test_assign_to_records_user_ids() -> None:
    other = UserEntity(id="u2", email="u2@example.com", role=Role.CUSTOMER)
    task = _task()
    change = task.assign_to(other)
    assert change == FieldChange("assignee", None, "u2")
    assert task.assign_to(other) is None
    assert task.is_member("u2")


def test_soft_delete_twice_raises() -> None:
    task = _task()
    task.soft_delete(NOW)
    assert task.active is False
    assert task.deleted_at == NOW
    with pytest.raises(ValidationException):
        task.soft_delete(NOW)


def test_subtask_apply_changes_and_membership() -> None:
    sub = SubTaskEntity(id="s1", task_id="t1", title="Draft")
    assert sub.belongs_to("t1")
    assert not sub.belongs_to("t2")
    changes = sub.apply_changes(title="Draft", done=True)
    assert changes == [FieldChange("done", False, True)]


def test_comment_requires_content() -> None:
    with pytest.raises(ValidationException):
        TaskCommentEntity(id=None, task_id="t1", author=OWNER, content=" ")


def test_log_entry_requires_actor() -> None:
    with pytest.raises(ValidationException):
        TaskLogEntity(id=None, task_id="t1", actor_id="", action=TaskLogAction.CREATED)


def test_user_entity_rejects_unknown_role() -> None:
    with pytest.raises(ValidationException):
        UserEntity(id="u9", email="x@example.com", role="ROOT")


def test_field_change_must_change_value() -> None:
    with pytest.raises(ValueError):
        FieldChange("title", "a", "a")


def test_normalize_tags_none() -> None:
    assert normalize_tags(None) == set()


def test_enum_values() -> None:
    assert TaskStatus.values() == ["TODO", "IN_PROGRESS", "DONE", "CANCELLED"]
    assert "COMMENT_ADDED" in TaskLogAction.values()
