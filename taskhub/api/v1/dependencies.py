"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the acting user id and the
task use cases. All use cases are built from infrastructure
implementations here; routes depend only on these dependencies.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.application.services import (
    ActorResolver,
    NotificationDispatcher,
    TaskAuditService,
)
from taskhub.application.use_cases.tasks import (
    SubTaskService,
    TaskCommentService,
    TaskService,
)
from taskhub.core.config import get_settings
from taskhub.infrastructure.persistence.database import get_db, get_db_transactional
from taskhub.infrastructure.persistence.repositories import (
    SubTaskRepository,
    TaskCommentRepository,
    TaskLogRepository,
    TaskRepository,
    UserRepository,
)
from taskhub.infrastructure.services import LogOnlyNotificationService


def get_actor_id(request: Request) -> str:
    """Acting user id from the identity header set by the upstream gateway.

    Authentication is not performed here; a missing header is a 401.
    """
    header = get_settings().actor_header_name
    actor_id = (request.headers.get(header) or "").strip()
    if not actor_id:
        raise HTTPException(status_code=401, detail=f"Missing {header} header")
    return actor_id


def get_notification_dispatcher() -> NotificationDispatcher:
    settings = get_settings()
    return NotificationDispatcher(
        LogOnlyNotificationService(), enabled=settings.notifications_enabled
    )


def _build_task_service(db: AsyncSession, notifications: NotificationDispatcher) -> TaskService:
    log_repo = TaskLogRepository(db)
    return TaskService(
        actor_resolver=ActorResolver(UserRepository(db)),
        task_repo=TaskRepository(db),
        subtask_repo=SubTaskRepository(db),
        comment_repo=TaskCommentRepository(db),
        log_repo=log_repo,
        audit=TaskAuditService(log_repo),
        notifications=notifications,
    )


async def get_task_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    notifications: Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)],
) -> TaskService:
    """TaskService for read operations (detail, list)."""
    return _build_task_service(db, notifications)


async def get_task_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db)],
    notifications: Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)],
) -> AsyncIterator[TaskService]:
    """TaskService for mutations; task rows and log entries commit together.

    Owns the transaction so queued notifications go out only after the
    commit succeeded. A failed request or commit drops them.
    """
    try:
        async with db.begin():
            yield _build_task_service(db, notifications)
    except Exception:
        notifications.discard()
        raise
    await notifications.flush()


async def get_subtask_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> SubTaskService:
    return SubTaskService(
        actor_resolver=ActorResolver(UserRepository(db)),
        task_repo=TaskRepository(db),
        subtask_repo=SubTaskRepository(db),
        audit=TaskAuditService(TaskLogRepository(db)),
    )


async def get_comment_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TaskCommentService:
    return TaskCommentService(
        actor_resolver=ActorResolver(UserRepository(db)),
        task_repo=TaskRepository(db),
        comment_repo=TaskCommentRepository(db),
        audit=TaskAuditService(TaskLogRepository(db)),
    )
