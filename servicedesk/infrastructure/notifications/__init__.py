"""Realtime notification helpers for the infrastructure layer."""

from .connection import FeedConnection
from .manager import NotificationConnectionManager, notification_manager
from .publisher import (
    NotificationPublisher,
    dispatch_notification,
    notification_publisher,
)
from .serialization import serialize_notification

__all__ = [
    "FeedConnection",
    "NotificationConnectionManager",
    "notification_manager",
    "NotificationPublisher",
    "notification_publisher",
    "dispatch_notification",
    "serialize_notification",
]
