"""Subtask repository. Implements ISubTaskRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.domain.entities import SubTaskEntity
from taskhub.domain.exceptions import ResourceNotFoundException
from taskhub.infrastructure.persistence.models.task import SubTask
from taskhub.shared.utils import ensure_utc


def _to_entity(s: SubTask) -> SubTaskEntity:
    return SubTaskEntity(
        id=s.id,
        task_id=s.task_id,
        title=s.title,
        done=s.done,
        active=s.active,
        deleted_at=ensure_utc(s.deleted_at),
        created_at=ensure_utc(s.created_at),
        updated_at=ensure_utc(s.updated_at),
    )


class SubTaskRepository:
    """Subtask repository. Soft-deleted rows stay readable by id."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_id(self, subtask_id: str) -> SubTaskEntity | None:
        row = await self.db.get(SubTask, subtask_id)
        return _to_entity(row) if row else None

    async def save(self, subtask: SubTaskEntity) -> SubTaskEntity:
        """Insert when subtask.id is None, otherwise update the existing row."""
        if subtask.id is None:
            row = SubTask(task_id=subtask.task_id)
            self.db.add(row)
        else:
            row = await self.db.get(SubTask, subtask.id)
            if row is None:
                raise ResourceNotFoundException("subtask", subtask.id)
        row.title = subtask.title
        row.done = subtask.done
        row.active = subtask.active
        row.deleted_at = subtask.deleted_at
        await self.db.flush()
        await self.db.refresh(row)
        return _to_entity(row)

    async def list_active_by_task(self, task_id: str) -> list[SubTaskEntity]:
        result = await self.db.execute(
            select(SubTask)
            .where(SubTask.task_id == task_id, SubTask.active.is_(True))
            .order_by(SubTask.created_at.asc(), SubTask.id)
        )
        return [_to_entity(r) for r in result.scalars().all()]
