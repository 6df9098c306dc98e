"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities or application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from taskhub.application.dtos.query import Page, PageRequest, TaskFilters
    from taskhub.domain.entities import (
        SubTaskEntity,
        TaskCommentEntity,
        TaskEntity,
        TaskLogEntity,
        UserEntity,
    )


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user lookups (actor and assignee resolution)."""

    async def get_by_id(self, user_id: str) -> UserEntity | None:
        """Return user by ID, or None."""


# Task repository interface
class ITaskRepository(Protocol):
    """Protocol for task repository (DIP)."""

    async def get_by_id(self, task_id: str) -> TaskEntity | None:
        """Return task by ID (active or soft-deleted), or None."""

    async def save(self, task: TaskEntity) -> TaskEntity:
        """Insert (id is None) or update the task; return persisted state with id and timestamps."""

    async def query(self, filters: TaskFilters, page: PageRequest) -> Page[TaskEntity]:
        """Return one page of tasks matching filters plus total count."""


# Subtask repository interface
class ISubTaskRepository(Protocol):
    """Protocol for subtask repository (DIP)."""

    async def get_by_id(self, subtask_id: str) -> SubTaskEntity | None:
        """Return subtask by ID (active or soft-deleted), or None."""

    async def save(self, subtask: SubTaskEntity) -> SubTaskEntity:
        """Insert or update the subtask; return persisted state."""

    async def list_active_by_task(self, task_id: str) -> list[SubTaskEntity]:
        """Return active subtasks of the task, oldest first."""


# Comment repository interface
class ITaskCommentRepository(Protocol):
    """Protocol for comment repository (DIP). Comments are never updated."""

    async def save(self, comment: TaskCommentEntity) -> TaskCommentEntity:
        """Insert the comment; return persisted state."""

    async def list_by_task_oldest_first(self, task_id: str) -> list[TaskCommentEntity]:
        """Return all comments of the task ordered by created_at ascending."""


# Task log repository interface
class ITaskLogRepository(Protocol):
    """Protocol for the append-only task log (DIP). No update or delete."""

    async def save(self, entry: TaskLogEntity) -> TaskLogEntity:
        """Append one entry; return persisted state."""

    async def list_by_task_newest_first(self, task_id: str) -> list[TaskLogEntity]:
        """Return all entries of the task ordered by created_at descending."""
