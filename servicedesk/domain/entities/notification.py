"""Domain entity representing a feed notification."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

NOTIFICATION_TYPE_INFO = "info"
NOTIFICATION_TYPE_SUCCESS = "success"
NOTIFICATION_TYPE_WARNING = "warning"
NOTIFICATION_TYPE_URGENT = "urgent"

NOTIFICATION_TYPES = frozenset(
    {
        NOTIFICATION_TYPE_INFO,
        NOTIFICATION_TYPE_SUCCESS,
        NOTIFICATION_TYPE_WARNING,
        NOTIFICATION_TYPE_URGENT,
    }
)


@dataclass(frozen=True)
class Notification:
    """Information pushed to every viewer allowed to see it.

    ``user_id`` and ``user_role`` describe the account whose activity produced
    the notification, captured when it was created. ``read_by`` holds the ids
    of the viewers that acknowledged it, in acknowledgement order.
    """

    id: str
    user_id: str
    user_role: str
    type: str
    title: str
    message: str
    timestamp: int
    user_name: str | None = None
    read_by: tuple[str, ...] = field(default_factory=tuple)
    link: str | None = None

    def is_read_by(self, viewer_id: str) -> bool:
        """Return ``True`` when ``viewer_id`` already acknowledged the notification."""

        return viewer_id in self.read_by

    def with_reader(self, viewer_id: str) -> "Notification":
        """Return a copy with ``viewer_id`` appended to ``read_by`` if missing."""

        if self.is_read_by(viewer_id):
            return self
        return replace(self, read_by=(*self.read_by, viewer_id))


__all__ = [
    "Notification",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_INFO",
    "NOTIFICATION_TYPE_SUCCESS",
    "NOTIFICATION_TYPE_WARNING",
    "NOTIFICATION_TYPE_URGENT",
]
