"""Task and subtask domain entities.

Represent the business concept of a task, independent of persistence.
Both follow the same soft-delete rule: active is False exactly when
deleted_at is set.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from taskhub.domain.entities.user import UserEntity
from taskhub.domain.enums import TaskPriority, TaskStatus
from taskhub.domain.exceptions import ValidationException
from taskhub.domain.value_objects import UNSET, FieldChange, Unset, normalize_tags


def _check_soft_delete_state(active: bool, deleted_at: datetime | None, kind: str) -> None:
    if active and deleted_at is not None:
        raise ValidationException(f"Active {kind} cannot have deleted_at", field="deleted_at")
    if not active and deleted_at is None:
        raise ValidationException(f"Inactive {kind} requires deleted_at", field="deleted_at")


def _check_title(title: str | None) -> None:
    if not title or not title.strip():
        raise ValidationException("Title is required", field="title")


@dataclass
class TaskEntity:
    """Domain entity for a task.

    id is None until the task store assigns one on first save. Validation
    runs on construction; mutators keep the invariants.
    """

    id: str | None
    title: str
    created_by: UserEntity
    description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    due_date: date | None = None
    tags: set[str] = field(default_factory=set)
    assignee: UserEntity | None = None
    active: bool = True
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.tags = normalize_tags(self.tags)
        self.validate()

    def validate(self) -> None:
        """Validate task business rules. Raises ValidationException if invalid."""
        _check_title(self.title)
        _check_soft_delete_state(self.active, self.deleted_at, "task")

    def is_member(self, user_id: str) -> bool:
        """Return whether the user created the task or is its assignee."""
        if self.created_by.id == user_id:
            return True
        return self.assignee is not None and self.assignee.id == user_id

    def apply_changes(
        self,
        *,
        title: str | None = None,
        description: str | None | Unset = UNSET,
        priority: TaskPriority | None = None,
        due_date: date | None | Unset = UNSET,
        tags: set[str] | frozenset[str] | None | Unset = UNSET,
    ) -> list[FieldChange]:
        """Apply the given arguments and return one FieldChange per field that differs.

        title and priority cannot be cleared, so None leaves them alone.
        description, due_date and tags are left alone only when UNSET; None
        (or an empty description or tag set) clears them. Arguments equal to
        the current value produce no change.
        """
        candidates: list[tuple[str, object]] = []
        if title is not None:
            _check_title(title)
            candidates.append(("title", title.strip()))
        if description is not UNSET:
            candidates.append(("description", (description or "").strip() or None))
        if priority is not None:
            candidates.append(("priority", priority))
        if due_date is not UNSET:
            candidates.append(("due_date", due_date))
        if tags is not UNSET:
            candidates.append(("tags", normalize_tags(tags)))

        changes: list[FieldChange] = []
        for name, new_value in candidates:
            old_value = getattr(self, name)
            if old_value == new_value:
                continue
            setattr(self, name, new_value)
            changes.append(FieldChange(name, old_value, new_value))
        return changes

    def change_status(self, status: TaskStatus) -> FieldChange | None:
        """Set status; return the change, or None when already in that status."""
        if self.status == status:
            return None
        change = FieldChange("status", self.status, status)
        self.status = status
        return change

    def assign_to(self, assignee: UserEntity) -> FieldChange | None:
        """Set assignee; change values are user ids. None when already assigned to them."""
        old_id = self.assignee.id if self.assignee else None
        if old_id == assignee.id:
            return None
        self.assignee = assignee
        return FieldChange("assignee", old_id, assignee.id)

    def soft_delete(self, when: datetime) -> None:
        """Mark inactive with deletion timestamp."""
        if not self.active:
            raise ValidationException("Task is already deleted", field="active")
        self.active = False
        self.deleted_at = when


@dataclass
class SubTaskEntity:
    """Domain entity for a subtask. task_id is a lookup-only back reference."""

    id: str | None
    task_id: str
    title: str
    done: bool = False
    active: bool = True
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate subtask business rules. Raises ValidationException if invalid."""
        if not self.task_id:
            raise ValidationException("Subtask must belong to a task", field="task_id")
        _check_title(self.title)
        _check_soft_delete_state(self.active, self.deleted_at, "subtask")

    def belongs_to(self, task_id: str) -> bool:
        return self.task_id == task_id

    def apply_changes(
        self, *, title: str | None = None, done: bool | None = None
    ) -> list[FieldChange]:
        """Apply the non-None arguments; one FieldChange per field that differs."""
        changes: list[FieldChange] = []
        if title is not None:
            _check_title(title)
            new_title = title.strip()
            if new_title != self.title:
                changes.append(FieldChange("title", self.title, new_title))
                self.title = new_title
        if done is not None and done != self.done:
            changes.append(FieldChange("done", self.done, done))
            self.done = done
        return changes

    def soft_delete(self, when: datetime) -> None:
        """Mark inactive with deletion timestamp."""
        if not self.active:
            raise ValidationException("Subtask is already deleted", field="active")
        self.active = False
        self.deleted_at = when
