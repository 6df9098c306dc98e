"""Task API: thin routes delegating to TaskService, SubTaskService and TaskCommentService."""

from datetime import date
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, Request

from taskhub.api.v1.dependencies import (
    get_actor_id,
    get_comment_service,
    get_subtask_service,
    get_task_service,
    get_task_service_for_write,
)
from taskhub.application.dtos import (
    CreateCommentCommand,
    CreateSubTaskCommand,
    CreateTaskCommand,
    PageRequest,
    PatchSubTaskCommand,
    PatchTaskCommand,
    TaskFilters,
)
from taskhub.application.use_cases.tasks import (
    SubTaskService,
    TaskCommentService,
    TaskService,
)
from taskhub.core.config import get_settings
from taskhub.core.limiter import limit_writes
from taskhub.domain.enums import TaskPriority, TaskStatus
from taskhub.domain.exceptions import ValidationException
from taskhub.domain.value_objects import UNSET
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
    TaskPatchRequest,
    TaskResponse,
    TaskStatusRequest,
)

router = APIRouter()

ActorId = Annotated[str, Depends(get_actor_id)]


def _tags(tags: list[str] | None) -> frozenset[str] | None:
    return frozenset(tags) if tags is not None else None


def _patch_command(body: TaskPatchRequest) -> PatchTaskCommand:
    """Fields absent from the request body stay UNSET; an explicit null clears them."""
    sent = body.model_fields_set
    return PatchTaskCommand(
        title=body.title,
        description=body.description if "description" in sent else UNSET,
        priority=body.priority,
        due_date=body.due_date if "due_date" in sent else UNSET,
        tags=_tags(body.tags) if "tags" in sent else UNSET,
    )


@router.post("", response_model=TaskResponse, status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: TaskCreateRequest,
    actor_id: ActorId,
    task_svc: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Create a task (ADMIN only)."""
    result = await task_svc.create_task(
        actor_id,
        CreateTaskCommand(
            title=body.title,
            description=body.description,
            priority=body.priority,
            due_date=body.due_date,
            tags=_tags(body.tags),
            assignee_id=body.assignee_id,
        ),
    )
    return TaskResponse.model_validate(result)


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    actor_id: ActorId,
    task_svc: Annotated[TaskService, Depends(get_task_service)],
    q: str | None = Query(default=None, max_length=200),
    status: TaskStatus | None = None,
    priority: TaskPriority | None = None,
    assignee_id: str | None = None,
    created_by_id: str | None = None,
    tag: str | None = None,
    due_from: date | None = None,
    due_to: date | None = None,
    include_deleted: bool = False,
    page: int = Query(default=0, ge=0),
    size: int | None = Query(default=None, ge=1),
    sort: str = "updated_at",
    order: Literal["asc", "desc"] = "desc",
):
    """List tasks. Customers only see tasks they created or are assigned to."""
    settings = get_settings()
    size = size or settings.default_page_size
    if size > settings.max_page_size:
        raise ValidationException(
            f"size must be <= {settings.max_page_size}", field="size"
        )
    filters = TaskFilters(
        q=q,
        status=status,
        priority=priority,
        assignee_id=assignee_id,
        created_by_id=created_by_id,
        tag=tag,
        due_from=due_from,
        due_to=due_to,
        include_deleted=include_deleted,
    )
    page_request = PageRequest(page=page, size=size, sort=sort, descending=order == "desc")
    result = await task_svc.list_tasks(actor_id, filters, page_request)
    return TaskListResponse.model_validate(result)


@router.get("/{task_id}", response_model=TaskDetailResponse)
async def get_task(
    task_id: str,
    actor_id: ActorId,
    task_svc: Annotated[TaskService, Depends(get_task_service)],
):
    """Task detail with active subtasks, comments and audit log."""
    result = await task_svc.get_task_detail(actor_id, task_id)
    return TaskDetailResponse.model_validate(result)


@router.patch("/{task_id}", response_model=TaskResponse)
@limit_writes
async def patch_task(
    request: Request,
    task_id: str,
    body: TaskPatchRequest,
    actor_id: ActorId,
    task_svc: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Patch core task fields (ADMIN only)."""
    result = await task_svc.patch_task(actor_id, task_id, _patch_command(body))
    return TaskResponse.model_validate(result)


@router.delete("/{task_id}", response_model=TaskResponse)
@limit_writes
async def delete_task(
    request: Request,
    task_id: str,
    actor_id: ActorId,
    task_svc: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Soft delete a task (ADMIN only)."""
    result = await task_svc.soft_delete_task(actor_id, task_id)
    return TaskResponse.model_validate(result)


@router.put("/{task_id}/assignee", response_model=TaskResponse)
@limit_writes
async def assign_task(
    request: Request,
    task_id: str,
    body: TaskAssignRequest,
    actor_id: ActorId,
    task_svc: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    result = await task_svc.assign_task(actor_id, task_id, body.assignee_id)
    return TaskResponse.model_validate(result)


@router.patch("/{task_id}/status", response_model=TaskResponse)
@limit_writes
async def update_status(
    request: Request,
    task_id: str,
    body: TaskStatusRequest,
    actor_id: ActorId,
    task_svc: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    result = await task_svc.update_status(actor_id, task_id, body.status)
    return TaskResponse.model_validate(result)


@router.post("/{task_id}/subtasks", response_model=SubTaskResponse, status_code=201)
@limit_writes
async def create_subtask(
    request: Request,
    task_id: str,
    body: SubTaskCreateRequest,
    actor_id: ActorId,
    subtask_svc: Annotated[SubTaskService, Depends(get_subtask_service)],
):
    result = await subtask_svc.create_subtask(
        actor_id, task_id, CreateSubTaskCommand(title=body.title)
    )
    return SubTaskResponse.model_validate(result)


@router.patch("/{task_id}/subtasks/{subtask_id}", response_model=SubTaskResponse)
@limit_writes
async def patch_subtask(
    request: Request,
    task_id: str,
    subtask_id: str,
    body: SubTaskPatchRequest,
    actor_id: ActorId,
    subtask_svc: Annotated[SubTaskService, Depends(get_subtask_service)],
):
    result = await subtask_svc.patch_subtask(
        actor_id,
        task_id,
        subtask_id,
        PatchSubTaskCommand(title=body.title, done=body.done),
    )
    return SubTaskResponse.model_validate(result)


@router.delete("/{task_id}/subtasks/{subtask_id}", response_model=SubTaskResponse)
@limit_writes
async def delete_subtask(
    request: Request,
    task_id: str,
    subtask_id: str,
    actor_id: ActorId,
    subtask_svc: Annotated[SubTaskService, Depends(get_subtask_service)],
):
    result = await subtask_svc.soft_delete_subtask(actor_id, task_id, subtask_id)
    return SubTaskResponse.model_validate(result)


@router.post("/{task_id}/comments", response_model=CommentResponse, status_code=201)
@limit_writes
async def add_comment(
    request: Request,
    task_id: str,
    body: CommentCreateRequest,
    actor_id: ActorId,
    comment_svc: Annotated[TaskCommentService, Depends(get_comment_service)],
):
    result = await comment_svc.add_comment(
        actor_id, task_id, CreateCommentCommand(content=body.content)
    )
    return CommentResponse.model_validate(result)
