"""DTOs for task listing: filters, page request, page result."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Generic, TypeVar

from taskhub.domain.enums import TaskPriority, TaskStatus
from taskhub.domain.exceptions import ValidationException


@dataclass(frozen=True)
class TaskFilters:
    """Task list filters. Unset (None) filters match everything.

    member_id restricts to tasks the user created or is assigned to; the
    engine sets it for customers and callers cannot widen it.
    """

    q: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assignee_id: str | None = None
    created_by_id: str | None = None
    tag: str | None = None
    due_from: date | None = None
    due_to: date | None = None
    include_deleted: bool = False
    member_id: str | None = None

    def __post_init__(self) -> None:
        if self.due_from and self.due_to and self.due_from > self.due_to:
            raise ValidationException("due_from must not be after due_to", field="due_from")


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page request with a single sort key."""

    SORTABLE_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"created_at", "updated_at", "due_date", "priority", "status", "title"}
    )

    page: int = 0
    size: int = 20
    sort: str = "updated_at"
    descending: bool = True

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValidationException("page must be >= 0", field="page")
        if self.size < 1:
            raise ValidationException("size must be >= 1", field="size")
        if self.sort not in self.SORTABLE_FIELDS:
            raise ValidationException(
                f"sort must be one of {sorted(self.SORTABLE_FIELDS)}", field="sort"
            )

    @property
    def offset(self) -> int:
        return self.page * self.size


T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total match count."""

    items: list[T]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 0
        return (self.total + self.size - 1) // self.size

    def map(self, fn: Callable[[T], R]) -> Page[R]:
        return Page(items=[fn(i) for i in self.items], total=self.total, page=self.page, size=self.size)
