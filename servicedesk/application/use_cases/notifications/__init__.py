"""Notification visibility engine, per-viewer feeds and arrival alerts.

Producers live in :mod:`.events` and are imported from there directly, as
they depend on the realtime infrastructure built on top of this package.
"""

from .alerts import (
    DEFAULT_VIBRATION_PATTERN,
    PERMISSION_DEFAULT,
    PERMISSION_DENIED,
    PERMISSION_GRANTED,
    URGENT_VIBRATION_PATTERN,
    AlertPreferences,
    AlertSurface,
    ArrivalNotifier,
    BufferedAlertSurface,
)
from .feed import NotificationFeed, NotificationStore
from .visibility import (
    CATEGORY_ALL,
    CATEGORY_SYSTEM,
    CATEGORY_URGENT,
    ROLE_FILTER_ALL,
    ROLE_FILTER_VALUES,
    SORT_NEWEST,
    SORT_OLDEST,
    accessible_notifications,
    badge_label,
    compute_visible,
    has_unread,
    is_unread_for,
    is_visible_to,
    unread_count,
)

__all__ = [
    "AlertPreferences",
    "AlertSurface",
    "ArrivalNotifier",
    "BufferedAlertSurface",
    "DEFAULT_VIBRATION_PATTERN",
    "URGENT_VIBRATION_PATTERN",
    "PERMISSION_DEFAULT",
    "PERMISSION_DENIED",
    "PERMISSION_GRANTED",
    "NotificationFeed",
    "NotificationStore",
    "CATEGORY_ALL",
    "CATEGORY_SYSTEM",
    "CATEGORY_URGENT",
    "ROLE_FILTER_ALL",
    "ROLE_FILTER_VALUES",
    "SORT_NEWEST",
    "SORT_OLDEST",
    "accessible_notifications",
    "badge_label",
    "compute_visible",
    "has_unread",
    "is_unread_for",
    "is_visible_to",
    "unread_count",
]
