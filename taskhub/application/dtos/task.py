"""DTOs for task use cases (no dependency on ORM or HTTP schemas).

Commands carry caller input into the engine; results mirror persisted
state back out. Patch commands leave a field untouched when it is None
(title, priority, subtask fields) or UNSET (clearable task fields).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from taskhub.domain.entities import (
    SubTaskEntity,
    TaskCommentEntity,
    TaskEntity,
    TaskLogEntity,
    UserEntity,
)
from taskhub.domain.enums import Role, TaskLogAction, TaskPriority, TaskStatus
from taskhub.domain.value_objects import UNSET, Unset


@dataclass(frozen=True)
class CreateTaskCommand:
    """Input for create_task. priority defaults to MEDIUM when omitted."""

    title: str
    description: str | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None
    tags: frozenset[str] | None = None
    assignee_id: str | None = None


@dataclass(frozen=True)
class PatchTaskCommand:
    """Input for patch_task.

    description, due_date and tags default to UNSET; passing None clears them.
    title and priority cannot be cleared and are skipped when None.
    """

    title: str | None = None
    description: str | None | Unset = UNSET
    priority: TaskPriority | None = None
    due_date: date | None | Unset = UNSET
    tags: frozenset[str] | None | Unset = UNSET

    def is_empty(self) -> bool:
        return (
            self.title is None
            and self.priority is None
            and self.description is UNSET
            and self.due_date is UNSET
            and self.tags is UNSET
        )


@dataclass(frozen=True)
class CreateSubTaskCommand:
    title: str


@dataclass(frozen=True)
class PatchSubTaskCommand:
    """Input for patch_subtask. Only non-None fields are applied."""

    title: str | None = None
    done: bool | None = None


@dataclass(frozen=True)
class CreateCommentCommand:
    content: str


@dataclass(frozen=True)
class UserRef:
    """Compact user reference embedded in task and comment results."""

    id: str
    email: str
    full_name: str | None
    role: Role

    @classmethod
    def from_entity(cls, user: UserEntity) -> UserRef:
        return cls(id=user.id, email=user.email, full_name=user.full_name, role=user.role)


@dataclass(frozen=True)
class TaskResult:
    """Task read-model (summary)."""

    id: str
    title: str
    description: str | None
    priority: TaskPriority
    status: TaskStatus
    due_date: date | None
    tags: frozenset[str]
    created_by: UserRef
    assignee: UserRef | None
    active: bool
    deleted_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_entity(cls, task: TaskEntity) -> TaskResult:
        if task.id is None:
            raise ValueError("TaskResult requires a persisted task (id is None)")
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            priority=task.priority,
            status=task.status,
            due_date=task.due_date,
            tags=frozenset(task.tags),
            created_by=UserRef.from_entity(task.created_by),
            assignee=UserRef.from_entity(task.assignee) if task.assignee else None,
            active=task.active,
            deleted_at=task.deleted_at,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


@dataclass(frozen=True)
class SubTaskResult:
    id: str
    task_id: str
    title: str
    done: bool
    active: bool
    deleted_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_entity(cls, subtask: SubTaskEntity) -> SubTaskResult:
        if subtask.id is None:
            raise ValueError("SubTaskResult requires a persisted subtask (id is None)")
        return cls(
            id=subtask.id,
            task_id=subtask.task_id,
            title=subtask.title,
            done=subtask.done,
            active=subtask.active,
            deleted_at=subtask.deleted_at,
            created_at=subtask.created_at,
            updated_at=subtask.updated_at,
        )


@dataclass(frozen=True)
class CommentResult:
    id: str
    task_id: str
    author: UserRef
    content: str
    created_at: datetime | None

    @classmethod
    def from_entity(cls, comment: TaskCommentEntity) -> CommentResult:
        if comment.id is None:
            raise ValueError("CommentResult requires a persisted comment (id is None)")
        return cls(
            id=comment.id,
            task_id=comment.task_id,
            author=UserRef.from_entity(comment.author),
            content=comment.content,
            created_at=comment.created_at,
        )


@dataclass(frozen=True)
class TaskLogResult:
    id: str
    task_id: str
    actor_id: str
    action: TaskLogAction
    field_name: str | None
    old_value: str | None
    new_value: str | None
    created_at: datetime | None

    @classmethod
    def from_entity(cls, entry: TaskLogEntity) -> TaskLogResult:
        if entry.id is None:
            raise ValueError("TaskLogResult requires a persisted entry (id is None)")
        return cls(
            id=entry.id,
            task_id=entry.task_id,
            actor_id=entry.actor_id,
            action=entry.action,
            field_name=entry.field_name,
            old_value=entry.old_value,
            new_value=entry.new_value,
            created_at=entry.created_at,
        )


@dataclass(frozen=True)
class TaskDetailResult:
    """Task with active subtasks, comments (oldest first) and logs (newest first)."""

    task: TaskResult
    subtasks: list[SubTaskResult]
    comments: list[CommentResult]
    logs: list[TaskLogResult]
