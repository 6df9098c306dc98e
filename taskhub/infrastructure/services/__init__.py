"""Infrastructure services (outbound adapters)."""

from taskhub.infrastructure.services.notification_service import LogOnlyNotificationService

__all__ = ["LogOnlyNotificationService"]
