"""Domain entities exposed by the application."""

from .notification import (
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_SUCCESS,
    NOTIFICATION_TYPE_URGENT,
    NOTIFICATION_TYPE_WARNING,
    NOTIFICATION_TYPES,
    Notification,
)
from .role import (
    PRIVILEGED_ROLES,
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    ROLE_MANAGER,
    ROLE_SUPER_ADMIN,
    ROLE_TECHNICIAN,
    ROLES,
    is_privileged,
)
from .ticket import TICKET_PRIORITY_HIGH, TicketSnapshot
from .user import User
from .viewer import Viewer

__all__ = [
    "Notification",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_INFO",
    "NOTIFICATION_TYPE_SUCCESS",
    "NOTIFICATION_TYPE_WARNING",
    "NOTIFICATION_TYPE_URGENT",
    "PRIVILEGED_ROLES",
    "ROLES",
    "ROLE_SUPER_ADMIN",
    "ROLE_ADMIN",
    "ROLE_MANAGER",
    "ROLE_TECHNICIAN",
    "ROLE_CUSTOMER",
    "is_privileged",
    "TicketSnapshot",
    "TICKET_PRIORITY_HIGH",
    "User",
    "Viewer",
]
