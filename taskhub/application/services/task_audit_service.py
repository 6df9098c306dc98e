"""Task audit service: append-only log entries for every task mutation.

Write failures never abort the mutation that triggered them. They are
logged under the audit logger as AuditLogWriteError and the call returns
None.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from enum import Enum
from typing import Any

from taskhub.application.interfaces.repositories import ITaskLogRepository
from taskhub.domain.entities import SubTaskEntity, TaskEntity, TaskLogEntity, UserEntity
from taskhub.domain.enums import TaskLogAction
from taskhub.domain.exceptions import AuditLogWriteError
from taskhub.domain.value_objects import FieldChange
from taskhub.shared.telemetry import AUDIT_LOGGER_NAME, add_span_event, get_logger

_audit_logger = get_logger(AUDIT_LOGGER_NAME)


def stringify_value(value: Any) -> str | None:
    """Render a field value for the log: enums by value, dates ISO, tag sets sorted."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return ",".join(sorted(str(v) for v in value))
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, UserEntity):
        return value.id
    return str(value)


class TaskAuditService:
    """Writes TaskLogEntity rows through the task log repository."""

    def __init__(self, log_repo: ITaskLogRepository) -> None:
        self.log_repo = log_repo

    async def record(
        self,
        task: TaskEntity,
        actor: UserEntity,
        action: TaskLogAction,
        field_name: str | None = None,
        old_value: Any = None,
        new_value: Any = None,
    ) -> TaskLogEntity | None:
        """Append exactly one entry. Returns the stored entry, or None when the write failed."""
        if task.id is None:
            raise ValueError("Cannot audit an unsaved task (id is None)")
        entry = TaskLogEntity(
            id=None,
            task_id=task.id,
            actor_id=actor.id,
            action=action,
            field_name=field_name,
            old_value=stringify_value(old_value),
            new_value=stringify_value(new_value),
        )
        try:
            saved = await self.log_repo.save(entry)
        except Exception as e:
            error = AuditLogWriteError(task.id, action.value, str(e))
            _audit_logger.error(
                "%s (field=%s, actor=%s)",
                error.message,
                field_name,
                actor.id,
                exc_info=True,
                extra={"error_code": error.error_code, "audit_details": error.details},
            )
            add_span_event("audit.write_failed", {"task_id": task.id, "action": action.value})
            return None
        return saved

    async def record_changes(
        self,
        task: TaskEntity,
        actor: UserEntity,
        action: TaskLogAction,
        changes: Iterable[FieldChange],
    ) -> list[TaskLogEntity]:
        """Append one entry per changed field. Failed writes are left out of the result."""
        written: list[TaskLogEntity] = []
        for change in changes:
            entry = await self.record(
                task,
                actor,
                action,
                field_name=change.field_name,
                old_value=change.old_value,
                new_value=change.new_value,
            )
            if entry is not None:
                written.append(entry)
        return written

    async def record_subtask(
        self,
        task: TaskEntity,
        actor: UserEntity,
        action: TaskLogAction,
        subtask: SubTaskEntity,
    ) -> TaskLogEntity | None:
        """Append a subtask lifecycle entry; the subtask id goes in new_value."""
        return await self.record(task, actor, action, field_name="subtask", new_value=subtask.id)

    async def record_subtask_changes(
        self,
        task: TaskEntity,
        actor: UserEntity,
        subtask: SubTaskEntity,
        changes: Iterable[FieldChange],
    ) -> list[TaskLogEntity]:
        """One SUBTASK_UPDATED entry per changed field, named subtask[<id>].<field>."""
        written: list[TaskLogEntity] = []
        for change in changes:
            entry = await self.record(
                task,
                actor,
                TaskLogAction.SUBTASK_UPDATED,
                field_name=f"subtask[{subtask.id}].{change.field_name}",
                old_value=change.old_value,
                new_value=change.new_value,
            )
            if entry is not None:
                written.append(entry)
        return written
