"""Infrastructure layer exports."""

from .http_indexing_service import HttpIndexingService
from .resend_notification_service import ResendNotificationService

__all__ = ["HttpIndexingService", "ResendNotificationService"]
