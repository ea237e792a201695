"""Best-effort alerts fired when a new notification reaches a viewer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final, Protocol

from servicedesk.domain.entities import NOTIFICATION_TYPE_URGENT, Notification

logger = logging.getLogger(__name__)

PERMISSION_GRANTED: Final[str] = "granted"
PERMISSION_DENIED: Final[str] = "denied"
PERMISSION_DEFAULT: Final[str] = "default"

URGENT_VIBRATION_PATTERN: Final[tuple[int, ...]] = (200, 100, 200, 100, 200)
DEFAULT_VIBRATION_PATTERN: Final[tuple[int, ...]] = (200,)


class AlertSurface(Protocol):
    """Operating system or browser facilities able to attract attention."""

    def play_sound(self) -> None: ...

    def vibrate(self, pattern: tuple[int, ...]) -> None: ...

    def show_desktop(self, title: str, body: str, tag: str) -> None: ...


@dataclass
class AlertPreferences:
    """State reported by the viewing surface that gates each alert."""

    sound_enabled: bool = True
    surface_visible: bool = True
    desktop_permission: str = PERMISSION_DEFAULT


def vibration_pattern_for(notification: Notification) -> tuple[int, ...]:
    if notification.type == NOTIFICATION_TYPE_URGENT:
        return URGENT_VIBRATION_PATTERN
    return DEFAULT_VIBRATION_PATTERN


class ArrivalNotifier:
    """Fire sound, vibration and desktop alerts for an arriving notification.

    Each step is attempted independently and failures are only logged, so a
    blocked audio context never prevents the vibration or the desktop alert.
    """

    def __init__(
        self, surface: AlertSurface, preferences: AlertPreferences | None = None
    ) -> None:
        self.surface = surface
        self.preferences = preferences or AlertPreferences()

    def notify(self, notification: Notification) -> None:
        preferences = self.preferences
        if preferences.sound_enabled:
            self._attempt("sound", self.surface.play_sound)
        self._attempt(
            "vibration", self.surface.vibrate, vibration_pattern_for(notification)
        )
        if (
            not preferences.surface_visible
            and preferences.desktop_permission == PERMISSION_GRANTED
        ):
            self._attempt(
                "desktop",
                self.surface.show_desktop,
                notification.title,
                notification.message,
                notification.id,
            )

    @staticmethod
    def _attempt(kind: str, action, *args: Any) -> None:
        try:
            action(*args)
        except Exception:
            logger.debug("Ignoring failed %s alert", kind, exc_info=True)


class BufferedAlertSurface:
    """Collect alerts as JSON messages to be delivered to a remote client."""

    def __init__(self) -> None:
        self._pending: list[dict[str, Any]] = []

    def play_sound(self) -> None:
        self._pending.append({"type": "alert", "data": {"kind": "sound"}})

    def vibrate(self, pattern: tuple[int, ...]) -> None:
        self._pending.append(
            {"type": "alert", "data": {"kind": "vibration", "pattern": list(pattern)}}
        )

    def show_desktop(self, title: str, body: str, tag: str) -> None:
        self._pending.append(
            {
                "type": "alert",
                "data": {"kind": "desktop", "title": title, "body": body, "tag": tag},
            }
        )

    def drain(self) -> list[dict[str, Any]]:
        """Return and forget the alerts collected so far."""

        pending, self._pending = self._pending, []
        return pending


__all__ = [
    "AlertPreferences",
    "AlertSurface",
    "ArrivalNotifier",
    "BufferedAlertSurface",
    "DEFAULT_VIBRATION_PATTERN",
    "PERMISSION_DEFAULT",
    "PERMISSION_DENIED",
    "PERMISSION_GRANTED",
    "URGENT_VIBRATION_PATTERN",
    "vibration_pattern_for",
]
