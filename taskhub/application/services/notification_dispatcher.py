"""Task notifications, queued during an operation and sent after commit."""

from __future__ import annotations

from taskhub.application.dtos.notification import NotificationKind, TaskNotification
from taskhub.application.interfaces.services import INotificationService
from taskhub.domain.entities import TaskEntity, UserEntity
from taskhub.domain.value_objects import FieldChange
from taskhub.shared.telemetry import get_logger

logger = get_logger(__name__)


class NotificationDispatcher:
    """Builds TaskNotification events and holds them until the unit of work commits.

    task_assigned and status_changed only queue. The owner of the
    transaction calls flush() once the commit succeeded, or discard()
    when it rolled back. Sender failures are logged and swallowed.
    """

    def __init__(self, sender: INotificationService | None, *, enabled: bool = True) -> None:
        self.sender = sender
        self.enabled = enabled and sender is not None
        self._pending: list[TaskNotification] = []

    @property
    def pending(self) -> tuple[TaskNotification, ...]:
        return tuple(self._pending)

    def task_assigned(self, task: TaskEntity, actor: UserEntity) -> None:
        if task.assignee is None:
            return
        self._queue(
            TaskNotification(
                kind=NotificationKind.TASK_ASSIGNED,
                task_id=task.id,
                actor_id=actor.id,
                recipient_ids=(task.assignee.id,),
                payload={"title": task.title, "assignee_id": task.assignee.id},
            )
        )

    def status_changed(self, task: TaskEntity, actor: UserEntity, change: FieldChange) -> None:
        recipients = {task.created_by.id}
        if task.assignee is not None:
            recipients.add(task.assignee.id)
        # The actor already knows.
        recipients.discard(actor.id)
        if not recipients:
            return
        self._queue(
            TaskNotification(
                kind=NotificationKind.TASK_STATUS_CHANGED,
                task_id=task.id,
                actor_id=actor.id,
                recipient_ids=tuple(sorted(recipients)),
                payload={
                    "title": task.title,
                    "old_status": change.old_value.value,
                    "new_status": change.new_value.value,
                },
            )
        )

    def _queue(self, event: TaskNotification) -> None:
        if self.enabled:
            self._pending.append(event)

    def discard(self) -> None:
        """Drop queued events; their changes were never committed."""
        if self._pending:
            logger.debug("Dropping %d uncommitted notifications", len(self._pending))
        self._pending.clear()

    async def flush(self) -> None:
        """Send every queued event in order, then clear the queue."""
        events, self._pending = self._pending, []
        for event in events:
            try:
                await self.sender.notify(event)
            except Exception as e:
                logger.warning(
                    "Failed to send %s notification for task %s: %s",
                    event.kind.value,
                    event.task_id,
                    str(e),
                    exc_info=True,
                )
