"""Domain entity describing the account consuming a notification feed."""

from dataclasses import dataclass

from .role import is_privileged


@dataclass(frozen=True)
class Viewer:
    id: str
    role: str

    @property
    def is_privileged(self) -> bool:
        return is_privileged(self.role)


__all__ = ["Viewer"]
