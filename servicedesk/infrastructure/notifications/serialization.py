"""JSON representations of notifications pushed to subscribers."""

from __future__ import annotations

from typing import Any

from servicedesk.domain.entities import Notification
from servicedesk.utils import epoch_millis_to_datetime


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    created_at = epoch_millis_to_datetime(notification.timestamp)
    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "user_role": notification.user_role,
        "user_name": notification.user_name,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "timestamp": notification.timestamp,
        "created_at": created_at.isoformat() if created_at else None,
        "read_by": list(notification.read_by),
        "link": notification.link,
    }


__all__ = ["serialize_notification"]
