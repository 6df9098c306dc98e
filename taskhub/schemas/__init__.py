"""Pydantic request/response schemas for the API."""

from taskhub.schemas.health import HealthResponse
from taskhub.schemas.task import (
    CommentCreateRequest,
    CommentResponse,
    SubTaskCreateRequest,
    SubTaskPatchRequest,
    SubTaskResponse,
    TaskAssignRequest,
    TaskCreateRequest,
    TaskDetailResponse,
    TaskListResponse,
    TaskLogResponse,
    TaskPatchRequest,
    TaskResponse,
    TaskStatusRequest,
)

__all__ = [
    "CommentCreateRequest",
    "CommentResponse",
    "HealthResponse",
    "SubTaskCreateRequest",
    "SubTaskPatchRequest",
    "SubTaskResponse",
    "TaskAssignRequest",
    "TaskCreateRequest",
    "TaskDetailResponse",
    "TaskListResponse",
    "TaskLogResponse",
    "TaskPatchRequest",
    "TaskResponse",
    "TaskStatusRequest",
]
