"""Per-viewer working set of notifications with optimistic mutations."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

from servicedesk.domain.entities import Notification, Viewer

from .alerts import ArrivalNotifier
from .visibility import (
    CATEGORY_ALL,
    ROLE_FILTER_ALL,
    SORT_NEWEST,
    accessible_notifications,
    compute_visible,
    has_unread,
    unread_count,
)

logger = logging.getLogger(__name__)


class NotificationStore(Protocol):
    """Source of truth for notifications.

    ``list_notifications`` returns the collection oldest first. Appending a
    reader must behave as a set union so concurrent marks never overwrite
    each other.
    """

    def list_notifications(self) -> Sequence[Notification]: ...

    def append_reader(self, notification_id: str, viewer_id: str) -> None: ...

    def delete(self, notification_id: str) -> None: ...


class NotificationFeed:
    """Hold a viewer's snapshot of the store and forward mutations to it.

    Mutations update the local copy first and then issue one store request
    per notification. A failed request is logged and the local change is
    kept; the next :meth:`sync` reconciles with whatever the store holds.
    """

    def __init__(
        self,
        viewer: Viewer,
        store: NotificationStore,
        *,
        notifier: ArrivalNotifier | None = None,
        notifications: Iterable[Notification] | None = None,
    ) -> None:
        self.viewer = viewer
        self.store = store
        self.notifier = notifier
        self._notifications: list[Notification] = list(notifications or [])
        self._revision = 0
        self._view_cache: tuple[tuple[int, str, str, str], list[Notification]] | None = None
        self._observed_size: int | None = (
            len(accessible_notifications(self._notifications, viewer))
            if notifications is not None
            else None
        )

    @property
    def notifications(self) -> list[Notification]:
        return list(self._notifications)

    def get(self, notification_id: str) -> Notification | None:
        for notification in self._notifications:
            if notification.id == notification_id:
                return notification
        return None

    # Reads -----------------------------------------------------------------

    def visible(
        self,
        category: str = CATEGORY_ALL,
        role_filter: str = ROLE_FILTER_ALL,
        sort_order: str = SORT_NEWEST,
    ) -> list[Notification]:
        """Return the filtered view, recomputed only when an input changed."""

        key = (self._revision, category, role_filter, sort_order)
        if self._view_cache is not None and self._view_cache[0] == key:
            return list(self._view_cache[1])
        result = compute_visible(
            self._notifications, self.viewer, category, role_filter, sort_order
        )
        self._view_cache = (key, result)
        return list(result)

    def accessible(self) -> list[Notification]:
        return accessible_notifications(self._notifications, self.viewer)

    def has_unread(self) -> bool:
        return has_unread(self._notifications, self.viewer)

    def unread_count(self) -> int:
        return unread_count(self._notifications, self.viewer)

    # Mutations -------------------------------------------------------------

    def mark_all_visible_read(self, visible: Iterable[Notification]) -> int:
        """Mark every unread notification in ``visible`` as read by the viewer.

        Returns the number of store requests issued.
        """

        pending = [
            notification.id
            for notification in visible
            if not notification.is_read_by(self.viewer.id)
        ]
        for notification_id in pending:
            self._apply_reader(notification_id)
        for notification_id in pending:
            self._forward(
                "mark-read",
                notification_id,
                self.store.append_reader,
                notification_id,
                self.viewer.id,
            )
        return len(pending)

    def mark_one_read(self, notification: Notification) -> bool:
        """Mark ``notification`` read; ``False`` when it already was."""

        current = self.get(notification.id) or notification
        if current.is_read_by(self.viewer.id):
            return False
        self._apply_reader(notification.id)
        self._forward(
            "mark-read",
            notification.id,
            self.store.append_reader,
            notification.id,
            self.viewer.id,
        )
        return True

    def open(self, notification: Notification) -> str | None:
        """Acknowledge ``notification`` and return its navigation target."""

        self.mark_one_read(notification)
        return notification.link

    def clear_visible(self, visible: Iterable[Notification]) -> int:
        """Delete exactly the notifications in ``visible``."""

        doomed = list(dict.fromkeys(notification.id for notification in visible))
        if not doomed:
            return 0
        removed = set(doomed)
        self._notifications = [
            notification for notification in self._notifications if notification.id not in removed
        ]
        self._touch()
        if self._observed_size is not None:
            self._observed_size = len(self.accessible())
        for notification_id in doomed:
            self._forward(
                "delete",
                notification_id,
                self.store.delete,
                notification_id,
            )
        return len(doomed)

    def dismiss(self, notification: Notification) -> None:
        self.clear_visible([notification])

    # Store reconciliation ----------------------------------------------------

    def sync(self, snapshot: Iterable[Notification]) -> Notification | None:
        """Replace the working set and report a newly arrived notification.

        The first call only records a baseline. Afterwards, when the viewer's
        accessible set grew, the last accessible notification in collection
        order is passed to the arrival notifier and returned.
        """

        self._notifications = list(snapshot)
        self._touch()
        accessible = self.accessible()
        previous_size = self._observed_size
        self._observed_size = len(accessible)
        if previous_size is None or len(accessible) <= previous_size:
            return None

        latest = accessible[-1]
        if self.notifier is not None:
            self.notifier.notify(latest)
        return latest

    def receive(self, notification: Notification) -> Notification | None:
        """Add a pushed notification to the working set."""

        if self.get(notification.id) is not None:
            return None
        if self._observed_size is None:
            self._observed_size = len(self.accessible())
        return self.sync([*self._notifications, notification])

    def refresh(self) -> Notification | None:
        return self.sync(self.store.list_notifications())

    # Internals ---------------------------------------------------------------

    def _apply_reader(self, notification_id: str) -> None:
        self._notifications = [
            notification.with_reader(self.viewer.id)
            if notification.id == notification_id
            else notification
            for notification in self._notifications
        ]
        self._touch()

    def _touch(self) -> None:
        self._revision += 1

    def _forward(self, action: str, notification_id: str, request, *args) -> None:
        try:
            request(*args)
        except Exception:
            logger.warning(
                "Store %s request failed for notification %s (viewer %s); keeping local state",
                action,
                notification_id,
                self.viewer.id,
                exc_info=True,
            )


__all__ = ["NotificationFeed", "NotificationStore"]
