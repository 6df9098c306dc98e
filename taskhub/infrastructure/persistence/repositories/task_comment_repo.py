"""Task comment repository. Append-only; implements ITaskCommentRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.domain.entities import TaskCommentEntity
from taskhub.infrastructure.persistence.models.activity import TaskComment
from taskhub.infrastructure.persistence.repositories.user_repo import user_to_entity
from taskhub.shared.utils import ensure_utc


def _to_entity(c: TaskComment) -> TaskCommentEntity:
    return TaskCommentEntity(
        id=c.id,
        task_id=c.task_id,
        author=user_to_entity(c.author),
        content=c.content,
        created_at=ensure_utc(c.created_at),
    )


class TaskCommentRepository:
    """Comments are inserted once and never updated."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def save(self, comment: TaskCommentEntity) -> TaskCommentEntity:
        if comment.id is not None:
            raise ValueError("Comments are immutable; only new comments can be saved")
        row = TaskComment(
            task_id=comment.task_id,
            author_id=comment.author.id,
            content=comment.content,
        )
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row, attribute_names=["author"])
        return _to_entity(row)

    async def list_by_task_oldest_first(self, task_id: str) -> list[TaskCommentEntity]:
        result = await self.db.execute(
            select(TaskComment)
            .where(TaskComment.task_id == task_id)
            .order_by(TaskComment.created_at.asc(), TaskComment.id)
        )
        return [_to_entity(r) for r in result.scalars().all()]
