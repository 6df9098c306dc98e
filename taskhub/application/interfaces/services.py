"""Service interfaces (ports) for the application layer.

Protocols define contracts for outbound services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from taskhub.application.dtos.notification import TaskNotification


# Notification sender interface
class INotificationService(Protocol):
    """Protocol for delivering task notifications (email, push, queue)."""

    async def notify(self, event: TaskNotification) -> None:
        """Deliver the notification. Callers treat it as fire-and-forget."""
