"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging

from anyio import from_thread

from servicedesk.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class NotificationPublisher:
    """Schedule the delivery of notifications to connected viewers."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` to be delivered to every viewer allowed to see it."""

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._manager.deliver, notification)
            except RuntimeError:
                logger.debug(
                    "No event loop available; skipping realtime delivery of %s",
                    notification.id,
                )
        else:
            loop.create_task(self._manager.deliver(notification))


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notification(notification: Notification) -> None:
    """Public helper that delegates to the shared publisher instance."""

    notification_publisher.dispatch(notification)


__all__ = [
    "NotificationPublisher",
    "notification_publisher",
    "dispatch_notification",
]
