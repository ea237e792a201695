"""Connection management helpers for notification websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import DefaultDict, Set

from servicedesk.application.use_cases.notifications.visibility import is_visible_to
from servicedesk.domain.entities import Notification

from .connection import FeedConnection

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Manage active websocket connections grouped by user."""

    def __init__(self) -> None:
        self._connections: DefaultDict[str, Set[FeedConnection]] = defaultdict(set)

    async def connect(self, connection: FeedConnection) -> None:
        """Accept the websocket connection and register it for its viewer."""

        await connection.websocket.accept()
        self._connections[connection.viewer.id].add(connection)

    def disconnect(self, connection: FeedConnection) -> None:
        """Remove ``connection`` from the pool of its viewer."""

        user_id = connection.viewer.id
        connections = self._connections.get(user_id)
        if connections is None:
            return
        connections.discard(connection)
        if not connections:
            self._connections.pop(user_id, None)

    async def deliver(self, notification: Notification) -> None:
        """Push ``notification`` to every connection whose viewer may see it."""

        for connections in list(self._connections.values()):
            for connection in list(connections):
                if not is_visible_to(notification, connection.viewer):
                    continue
                try:
                    await connection.deliver(notification)
                except Exception:
                    logger.warning(
                        "Dropping notification socket for user %s",
                        connection.viewer.id,
                        exc_info=True,
                    )
                    self.disconnect(connection)


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
