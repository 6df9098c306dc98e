"""Task, tag and subtask ORM models."""

from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskhub.domain.enums import TaskPriority, TaskStatus
from taskhub.infrastructure.persistence.database import Base
from taskhub.infrastructure.persistence.models.mixins import SoftDeleteMixin, TaskhubModel
from taskhub.infrastructure.persistence.models.user import User


class Task(TaskhubModel, SoftDeleteMixin, Base):
    """Task. Table: task. Creator and assignee are loaded eagerly with the row."""

    __tablename__ = "task"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[str] = mapped_column(
        String(16), nullable=False, default=TaskPriority.MEDIUM.value
    )
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=TaskStatus.TODO.value, index=True
    )
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_by_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    assignee_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True, index=True
    )

    created_by: Mapped[User] = relationship(foreign_keys=[created_by_id], lazy="joined")
    assignee: Mapped[User | None] = relationship(foreign_keys=[assignee_id], lazy="joined")
    tag_rows: Mapped[list["TaskTag"]] = relationship(
        back_populates="task",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_task_created_by_assignee", "created_by_id", "assignee_id"),
    )


class TaskTag(Base):
    """One tag on a task. Table: task_tag. Primary key (task_id, name)."""

    __tablename__ = "task_tag"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), primary_key=True
    )
    name: Mapped[str] = mapped_column(String(100), primary_key=True, index=True)

    task: Mapped[Task] = relationship(back_populates="tag_rows")


class SubTask(TaskhubModel, SoftDeleteMixin, Base):
    """Subtask of a task. Table: subtask."""

    __tablename__ = "subtask"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    done: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
