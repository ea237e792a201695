"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationNotFoundError, NotificationRepository
from .scoped_notification_store import ScopedNotificationStore
from .user_repository import UserRepository

__all__ = [
    "NotificationNotFoundError",
    "NotificationRepository",
    "ScopedNotificationStore",
    "UserRepository",
]
