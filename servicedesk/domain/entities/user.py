"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

from .role import is_privileged
from .viewer import Viewer


@dataclass
class User:
    """Core attributes describing a service desk account."""

    id: str | None
    name: str
    email: str
    role: str
    password: str
    is_active: bool = True
    created_at: datetime | None = None

    def is_admin(self) -> bool:
        """Return ``True`` when the user is a super administrator or administrator."""

        return is_privileged(self.role)

    def as_viewer(self) -> Viewer:
        """Return the feed viewer context for this account."""

        if self.id is None:
            raise ValueError("User id is required to build a viewer")
        return Viewer(id=self.id, role=self.role)


__all__ = ["User"]
