"""Role-based visibility, filtering and ordering of notification feeds.

Everything in this module is a pure function of its arguments. The visibility
rule for each viewer role lives in :data:`VISIBILITY_RULES`; a role missing
from the table sees nothing.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Final

from servicedesk.domain.entities import (
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_SUCCESS,
    NOTIFICATION_TYPE_URGENT,
    NOTIFICATION_TYPE_WARNING,
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    ROLE_MANAGER,
    ROLE_SUPER_ADMIN,
    ROLE_TECHNICIAN,
    Notification,
    Viewer,
)

CATEGORY_ALL: Final[str] = "all"
CATEGORY_URGENT: Final[str] = "urgent"
CATEGORY_SYSTEM: Final[str] = "system"

ROLE_FILTER_ALL: Final[str] = "ALL"
ROLE_FILTER_VALUES: Final[tuple[str, ...]] = (
    ROLE_FILTER_ALL,
    ROLE_TECHNICIAN,
    ROLE_MANAGER,
    ROLE_ADMIN,
    ROLE_CUSTOMER,
)

SORT_NEWEST: Final[str] = "newest"
SORT_OLDEST: Final[str] = "oldest"

BADGE_LIMIT: Final[int] = 9

VisibilityRule = Callable[[Notification, Viewer], bool]


def _sees_everything(notification: Notification, viewer: Viewer) -> bool:
    return True


def _sees_all_but_super_admin(notification: Notification, viewer: Viewer) -> bool:
    return notification.user_role != ROLE_SUPER_ADMIN


def _sees_field_staff(notification: Notification, viewer: Viewer) -> bool:
    return notification.user_role in (ROLE_MANAGER, ROLE_TECHNICIAN)


def _sees_own(notification: Notification, viewer: Viewer) -> bool:
    return notification.user_id == viewer.id


VISIBILITY_RULES: Final[Mapping[str, VisibilityRule]] = {
    ROLE_SUPER_ADMIN: _sees_everything,
    ROLE_ADMIN: _sees_all_but_super_admin,
    ROLE_MANAGER: _sees_field_staff,
    ROLE_TECHNICIAN: _sees_own,
    ROLE_CUSTOMER: _sees_own,
}

CATEGORY_TYPES: Final[Mapping[str, frozenset[str] | None]] = {
    CATEGORY_ALL: None,
    CATEGORY_URGENT: frozenset({NOTIFICATION_TYPE_URGENT, NOTIFICATION_TYPE_WARNING}),
    CATEGORY_SYSTEM: frozenset({NOTIFICATION_TYPE_INFO, NOTIFICATION_TYPE_SUCCESS}),
}


def is_visible_to(notification: Notification, viewer: Viewer) -> bool:
    """Return ``True`` when ``viewer`` may see ``notification`` at all."""

    rule = VISIBILITY_RULES.get(viewer.role)
    if rule is None:
        return False
    return rule(notification, viewer)


def accessible_notifications(
    notifications: Iterable[Notification], viewer: Viewer
) -> list[Notification]:
    """Return the notifications ``viewer`` may see, in collection order."""

    return [notification for notification in notifications if is_visible_to(notification, viewer)]


def matches_category(notification: Notification, category: str) -> bool:
    """Return ``True`` when ``notification`` belongs to the ``category`` bucket."""

    try:
        allowed_types = CATEGORY_TYPES[category]
    except KeyError:
        raise ValueError(f"Unknown notification category '{category}'") from None
    return allowed_types is None or notification.type in allowed_types


def sort_notifications(
    notifications: Iterable[Notification], sort_order: str
) -> list[Notification]:
    """Order ``notifications`` by timestamp, keeping collection order on ties."""

    if sort_order == SORT_NEWEST:
        return sorted(notifications, key=lambda item: item.timestamp, reverse=True)
    if sort_order == SORT_OLDEST:
        return sorted(notifications, key=lambda item: item.timestamp)
    raise ValueError(f"Unknown sort order '{sort_order}'")


def compute_visible(
    notifications: Sequence[Notification],
    viewer: Viewer,
    category: str = CATEGORY_ALL,
    role_filter: str = ROLE_FILTER_ALL,
    sort_order: str = SORT_NEWEST,
) -> list[Notification]:
    """Return the ordered notifications ``viewer`` sees under the given filters.

    Visibility is applied first, then the category bucket, then the role
    filter (only honoured for privileged viewers), and finally the ordering.
    """

    if category not in CATEGORY_TYPES:
        raise ValueError(f"Unknown notification category '{category}'")

    filtered = [
        notification
        for notification in accessible_notifications(notifications, viewer)
        if matches_category(notification, category)
    ]
    if viewer.is_privileged and role_filter != ROLE_FILTER_ALL:
        filtered = [
            notification for notification in filtered if notification.user_role == role_filter
        ]
    return sort_notifications(filtered, sort_order)


def is_unread_for(notification: Notification, viewer: Viewer) -> bool:
    return not notification.is_read_by(viewer.id)


def unread_count(notifications: Iterable[Notification], viewer: Viewer) -> int:
    """Count the unread notifications among those ``viewer`` may see."""

    return sum(
        1
        for notification in accessible_notifications(notifications, viewer)
        if is_unread_for(notification, viewer)
    )


def has_unread(notifications: Iterable[Notification], viewer: Viewer) -> bool:
    """Return ``True`` when the viewer's accessible set holds an unread item."""

    return any(
        is_unread_for(notification, viewer)
        for notification in accessible_notifications(notifications, viewer)
    )


def badge_label(count: int) -> str | None:
    """Return the text shown on the unread badge, ``None`` when hidden."""

    if count <= 0:
        return None
    if count > BADGE_LIMIT:
        return f"{BADGE_LIMIT}+"
    return str(count)


__all__ = [
    "CATEGORY_ALL",
    "CATEGORY_URGENT",
    "CATEGORY_SYSTEM",
    "CATEGORY_TYPES",
    "ROLE_FILTER_ALL",
    "ROLE_FILTER_VALUES",
    "SORT_NEWEST",
    "SORT_OLDEST",
    "VISIBILITY_RULES",
    "accessible_notifications",
    "badge_label",
    "compute_visible",
    "has_unread",
    "is_unread_for",
    "is_visible_to",
    "matches_category",
    "sort_notifications",
    "unread_count",
]
