"""Comment and task log ORM models. Both are append-only."""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, ForeignKey, Index, String, Text, event
from sqlalchemy.orm import Mapped, Mapper, mapped_column, relationship
from sqlalchemy.sql import func

from taskhub.infrastructure.persistence.database import Base
from taskhub.infrastructure.persistence.models.user import User
from taskhub.shared.utils import generate_cuid, utc_now


class TaskComment(Base):
    """Comment on a task. Table: task_comment."""

    __tablename__ = "task_comment"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), nullable=False, index=True
    )
    author_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False
    )

    author: Mapped[User] = relationship(lazy="joined")


class TaskLog(Base):
    """Task audit entry: who changed which field of which task, and when. No update/delete."""

    __tablename__ = "task_log"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), nullable=False
    )
    actor_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=False
    )
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    field_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    old_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    new_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("ix_task_log_task_created", "task_id", "created_at"),)


@event.listens_for(TaskLog, "before_update")
def _prevent_task_log_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: TaskLog
) -> None:
    """Task log entries are append-only; updates are forbidden."""
    raise ValueError("Task log entries are immutable and cannot be updated.")


@event.listens_for(TaskLog, "before_delete")
def _prevent_task_log_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: TaskLog
) -> None:
    raise ValueError("Task log entries cannot be deleted.")
