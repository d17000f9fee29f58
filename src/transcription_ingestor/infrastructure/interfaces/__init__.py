"""Infrastructure interface exports."""

from .indexing_service import IndexingService
from .notification_service import NotificationService

__all__ = ["IndexingService", "NotificationService"]
