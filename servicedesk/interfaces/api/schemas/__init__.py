from .auth import Token
from .notification import (
    CategoryFilter,
    NotificationCreate,
    NotificationFeedRead,
    NotificationMutationResult,
    NotificationOpenResult,
    NotificationRead,
    RoleFilter,
    SortOrder,
)
from .ticket import TicketEventCreate, TicketEventResult, TicketPayload
from .user import UserCreate, UserRead

__all__ = [
    "CategoryFilter",
    "NotificationCreate",
    "NotificationFeedRead",
    "NotificationMutationResult",
    "NotificationOpenResult",
    "NotificationRead",
    "RoleFilter",
    "SortOrder",
    "TicketEventCreate",
    "TicketEventResult",
    "TicketPayload",
    "Token",
    "UserCreate",
    "UserRead",
]
