"""Notification store opening a short-lived session for every request."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from sqlalchemy.orm import Session

from servicedesk.domain.entities import Notification

from .notification_repository import NotificationRepository


class ScopedNotificationStore:
    """Expose :class:`NotificationRepository` to long-lived websocket feeds."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def list_notifications(self) -> Sequence[Notification]:
        with self._session_factory() as session:
            return NotificationRepository(session).list_notifications()

    def append_reader(self, notification_id: str, viewer_id: str) -> None:
        with self._session_factory() as session:
            NotificationRepository(session).append_reader(notification_id, viewer_id)

    def delete(self, notification_id: str) -> None:
        with self._session_factory() as session:
            NotificationRepository(session).delete(notification_id)


__all__ = ["ScopedNotificationStore"]
