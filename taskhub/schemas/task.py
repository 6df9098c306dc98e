"""Task API schemas. Thin pass-through over the application DTOs."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskhub.domain.enums import Role, TaskLogAction, TaskPriority, TaskStatus


def _sorted_tags(v: Any) -> Any:
    if isinstance(v, (set, frozenset)):
        return sorted(v)
    return v


class TaskCreateRequest(BaseModel):
    """Request body for creating a task (ADMIN only)."""

    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None
    tags: list[str] | None = Field(default=None, max_length=50)
    assignee_id: str | None = None


class TaskPatchRequest(BaseModel):
    """Partial update. Omitted fields are left untouched.

    An explicit null clears description, due_date or tags; a null title or
    priority is ignored.
    """

    title: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None
    tags: list[str] | None = Field(default=None, max_length=50)


class TaskAssignRequest(BaseModel):
    assignee_id: str = Field(..., min_length=1)


class TaskStatusRequest(BaseModel):
    status: TaskStatus


class SubTaskCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)


class SubTaskPatchRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=500)
    done: bool | None = None


class CommentCreateRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=10_000)


class UserRefResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    full_name: str | None = None
    role: Role


class TaskResponse(BaseModel):
    """Task response (create, patch, status, assign, list item)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    priority: TaskPriority
    status: TaskStatus
    due_date: date | None = None
    tags: list[str] = Field(default_factory=list)
    created_by: UserRefResponse
    assignee: UserRefResponse | None = None
    active: bool
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def tags_sorted(cls, v: Any) -> Any:
        return _sorted_tags(v)


class SubTaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    title: str
    done: bool
    active: bool
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    author: UserRefResponse
    content: str
    created_at: datetime | None = None


class TaskLogResponse(BaseModel):
    """Audit entry. Values are the stored string forms."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    actor_id: str
    action: TaskLogAction
    field_name: str | None = None
    old_value: str | None = None
    new_value: str | None = None
    created_at: datetime | None = None


class TaskDetailResponse(BaseModel):
    """Task with active subtasks, comments (oldest first) and logs (newest first)."""

    model_config = ConfigDict(from_attributes=True)

    task: TaskResponse
    subtasks: list[SubTaskResponse]
    comments: list[CommentResponse]
    logs: list[TaskLogResponse]


class TaskListResponse(BaseModel):
    """One page of tasks."""

    model_config = ConfigDict(from_attributes=True)

    items: list[TaskResponse]
    total: int
    page: int
    size: int
    total_pages: int
