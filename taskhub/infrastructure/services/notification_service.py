"""Task notification sender implementations."""

from taskhub.application.dtos.notification import TaskNotification
from taskhub.shared.telemetry import get_logger

logger = get_logger(__name__)


class LogOnlyNotificationService:
    """INotificationService implementation that logs instead of delivering.

    Use when no delivery channel is configured. Production can swap in an
    email, push or queue-based implementation.
    """

    async def notify(self, event: TaskNotification) -> None:
        """Log the notification; nothing is actually sent."""
        if not event.recipient_ids:
            logger.info(
                "Task notify: no recipients, skipping %s for task %s",
                event.kind.value,
                event.task_id,
            )
            return
        logger.info(
            "Task notify: would send %s for task %s to %d recipients",
            event.kind.value,
            event.task_id,
            len(event.recipient_ids),
        )
