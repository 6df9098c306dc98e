"""Task repository: save, lookup and filtered paging. Implements ITaskRepository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.application.dtos.query import Page, PageRequest, TaskFilters
from taskhub.domain.entities import TaskEntity
from taskhub.domain.enums import TaskPriority, TaskStatus
from taskhub.domain.exceptions import ResourceNotFoundException
from taskhub.infrastructure.persistence.models.task import Task, TaskTag
from taskhub.infrastructure.persistence.repositories.user_repo import user_to_entity
from taskhub.shared.utils import ensure_utc, utc_now

# Enum-valued columns sort by declaration order, not alphabetically.
_PRIORITY_RANK = case(
    {p.value: i for i, p in enumerate(TaskPriority)}, value=Task.priority
)
_STATUS_RANK = case({s.value: i for i, s in enumerate(TaskStatus)}, value=Task.status)

_SORT_COLUMNS: dict[str, Any] = {
    "created_at": Task.created_at,
    "updated_at": Task.updated_at,
    "due_date": Task.due_date,
    "priority": _PRIORITY_RANK,
    "status": _STATUS_RANK,
    "title": Task.title,
}


def _to_entity(t: Task) -> TaskEntity:
    """Map Task ORM to TaskEntity."""
    return TaskEntity(
        id=t.id,
        title=t.title,
        created_by=user_to_entity(t.created_by),
        description=t.description,
        priority=TaskPriority(t.priority),
        status=TaskStatus(t.status),
        due_date=t.due_date,
        tags={row.name for row in t.tag_rows},
        assignee=user_to_entity(t.assignee) if t.assignee else None,
        active=t.active,
        deleted_at=ensure_utc(t.deleted_at),
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _apply_filters(stmt: Select, filters: TaskFilters) -> Select:
    if not filters.include_deleted:
        stmt = stmt.where(Task.active.is_(True))
    if filters.q:
        pattern = f"%{_escape_like(filters.q.strip())}%"
        stmt = stmt.where(
            or_(
                Task.title.ilike(pattern, escape="\\"),
                Task.description.ilike(pattern, escape="\\"),
            )
        )
    if filters.status is not None:
        stmt = stmt.where(Task.status == filters.status.value)
    if filters.priority is not None:
        stmt = stmt.where(Task.priority == filters.priority.value)
    if filters.assignee_id is not None:
        stmt = stmt.where(Task.assignee_id == filters.assignee_id)
    if filters.created_by_id is not None:
        stmt = stmt.where(Task.created_by_id == filters.created_by_id)
    if filters.tag:
        stmt = stmt.where(Task.tag_rows.any(TaskTag.name == filters.tag.strip()))
    if filters.due_from is not None:
        stmt = stmt.where(Task.due_date >= filters.due_from)
    if filters.due_to is not None:
        stmt = stmt.where(Task.due_date <= filters.due_to)
    if filters.member_id is not None:
        stmt = stmt.where(
            or_(Task.created_by_id == filters.member_id, Task.assignee_id == filters.member_id)
        )
    return stmt


class TaskRepository:
    """Task repository. Implements ITaskRepository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get_row(self, task_id: str) -> Task | None:
        result = await self.db.execute(
            select(Task)
            .where(Task.id == task_id)
            .execution_options(populate_existing=True)
        )
        return result.unique().scalar_one_or_none()

    async def get_by_id(self, task_id: str) -> TaskEntity | None:
        row = await self._get_row(task_id)
        return _to_entity(row) if row else None

    async def save(self, task: TaskEntity) -> TaskEntity:
        """Insert when task.id is None, otherwise update the existing row."""
        if task.id is None:
            row = Task(created_by_id=task.created_by.id)
            self.db.add(row)
        else:
            row = await self._get_row(task.id)
            if row is None:
                raise ResourceNotFoundException("task", task.id)
            # Tag-only edits do not touch the task row, so bump explicitly.
            row.updated_at = utc_now()
        row.title = task.title
        row.description = task.description
        row.priority = task.priority.value
        row.status = task.status.value
        row.due_date = task.due_date
        row.assignee_id = task.assignee.id if task.assignee else None
        row.active = task.active
        row.deleted_at = task.deleted_at
        self._sync_tags(row, task.tags)
        await self.db.flush()

        saved = await self._get_row(row.id)
        return _to_entity(saved)

    def _sync_tags(self, row: Task, tags: set[str]) -> None:
        """Remove dropped tags and add new ones; unchanged tags keep their rows."""
        current = {t.name: t for t in row.tag_rows} if row.id else {}
        for name, tag_row in current.items():
            if name not in tags:
                row.tag_rows.remove(tag_row)
        for name in sorted(tags - current.keys()):
            row.tag_rows.append(TaskTag(name=name))

    async def query(self, filters: TaskFilters, page: PageRequest) -> Page[TaskEntity]:
        base = _apply_filters(select(Task.id), filters)
        total = (
            await self.db.execute(select(func.count()).select_from(base.subquery()))
        ).scalar_one()

        sort_col = _SORT_COLUMNS[page.sort]
        order = sort_col.desc() if page.descending else sort_col.asc()
        stmt = (
            _apply_filters(select(Task), filters)
            .order_by(order, Task.id)
            .offset(page.offset)
            .limit(page.size)
        )
        result = await self.db.execute(stmt)
        rows = result.unique().scalars().all()
        return Page(
            items=[_to_entity(r) for r in rows],
            total=total,
            page=page.page,
            size=page.size,
        )
