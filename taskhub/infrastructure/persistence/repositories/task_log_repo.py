"""Task log repository. Append-only; implements ITaskLogRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.domain.entities import TaskLogEntity
from taskhub.domain.enums import TaskLogAction
from taskhub.infrastructure.persistence.models.activity import TaskLog
from taskhub.shared.utils import ensure_utc


def _orm_to_entity(row: TaskLog) -> TaskLogEntity:
    """Map ORM to domain entity."""
    return TaskLogEntity(
        id=row.id,
        task_id=row.task_id,
        actor_id=row.actor_id,
        action=TaskLogAction(row.action),
        field_name=row.field_name,
        old_value=row.old_value,
        new_value=row.new_value,
        created_at=ensure_utc(row.created_at),
    )


class TaskLogRepository:
    """Append-only task log repository. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def save(self, entry: TaskLogEntity) -> TaskLogEntity:
        """Append one entry inside a SAVEPOINT; a failed insert leaves the outer transaction usable."""
        row = TaskLog(
            task_id=entry.task_id,
            actor_id=entry.actor_id,
            action=entry.action.value,
            field_name=entry.field_name,
            old_value=entry.old_value,
            new_value=entry.new_value,
        )
        async with self.db.begin_nested():
            self.db.add(row)
            await self.db.flush()
        return _orm_to_entity(row)

    async def list_by_task_newest_first(self, task_id: str) -> list[TaskLogEntity]:
        result = await self.db.execute(
            select(TaskLog)
            .where(TaskLog.task_id == task_id)
            .order_by(TaskLog.created_at.desc(), TaskLog.id.desc())
        )
        return [_orm_to_entity(r) for r in result.scalars().all()]
