"""A websocket subscriber holding its own notification feed."""

from __future__ import annotations

from typing import Any

from fastapi import WebSocket

from servicedesk.application.use_cases.notifications import (
    AlertPreferences,
    ArrivalNotifier,
    BufferedAlertSurface,
    NotificationFeed,
)
from servicedesk.domain.entities import Notification, Viewer

from .serialization import serialize_notification


class FeedConnection:
    """Bind a websocket to the feed of the viewer that opened it.

    Pushed notifications go through :meth:`NotificationFeed.receive`, so the
    alerts triggered by an arrival are sent right after the notification.
    """

    def __init__(
        self,
        websocket: WebSocket,
        feed: NotificationFeed,
        surface: BufferedAlertSurface,
    ) -> None:
        self.websocket = websocket
        self.feed = feed
        self.surface = surface

    @classmethod
    def open(
        cls,
        websocket: WebSocket,
        feed: NotificationFeed,
        preferences: AlertPreferences | None = None,
    ) -> "FeedConnection":
        surface = BufferedAlertSurface()
        feed.notifier = ArrivalNotifier(surface, preferences)
        return cls(websocket, feed, surface)

    @property
    def viewer(self) -> Viewer:
        return self.feed.viewer

    @property
    def preferences(self) -> AlertPreferences:
        if self.feed.notifier is None:
            self.feed.notifier = ArrivalNotifier(self.surface)
        return self.feed.notifier.preferences

    async def send_json(self, message: dict[str, Any]) -> None:
        await self.websocket.send_json(message)

    async def deliver(self, notification: Notification) -> None:
        """Send ``notification`` followed by any alerts it triggered."""

        self.feed.receive(notification)
        await self.send_json({"type": "notification", "data": serialize_notification(notification)})
        for alert in self.surface.drain():
            await self.send_json(alert)


__all__ = ["FeedConnection"]
