"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

NotificationType = Literal["info", "success", "warning", "urgent"]
CategoryFilter = Literal["all", "urgent", "system"]
RoleFilter = Literal["ALL", "TECHNICIAN", "MANAGER", "ADMIN", "CUSTOMER"]
SortOrder = Literal["newest", "oldest"]


class NotificationCreate(BaseModel):
    """Payload used to push a notification as the current user."""

    type: NotificationType = "info"
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    link: str | None = Field(default=None, max_length=100)


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    user_id: str
    user_role: str
    user_name: str | None = None
    type: str
    title: str
    message: str
    timestamp: int
    created_at: datetime
    read_by: list[str] = Field(default_factory=list)
    link: str | None = None
    is_read: bool = Field(..., description="Whether the requesting viewer already read it")


class NotificationFeedRead(BaseModel):
    """Filtered view of the feed along with the unread indicators."""

    items: list[NotificationRead]
    unread_count: int
    has_unread: bool
    badge: str | None = None


class NotificationMutationResult(BaseModel):
    affected: int


class NotificationOpenResult(BaseModel):
    id: str
    link: str | None = None


__all__ = [
    "CategoryFilter",
    "NotificationCreate",
    "NotificationFeedRead",
    "NotificationMutationResult",
    "NotificationOpenResult",
    "NotificationRead",
    "NotificationType",
    "RoleFilter",
    "SortOrder",
]
