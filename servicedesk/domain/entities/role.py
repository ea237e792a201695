"""Roles an account can hold inside the service desk."""

ROLE_SUPER_ADMIN = "SUPER_ADMIN"
ROLE_ADMIN = "ADMIN"
ROLE_MANAGER = "MANAGER"
ROLE_TECHNICIAN = "TECHNICIAN"
ROLE_CUSTOMER = "CUSTOMER"

ROLES = frozenset(
    {ROLE_SUPER_ADMIN, ROLE_ADMIN, ROLE_MANAGER, ROLE_TECHNICIAN, ROLE_CUSTOMER}
)
PRIVILEGED_ROLES = frozenset({ROLE_SUPER_ADMIN, ROLE_ADMIN})


def is_privileged(role: str) -> bool:
    """Return ``True`` when ``role`` grants administrative access."""

    return role in PRIVILEGED_ROLES


__all__ = [
    "ROLE_SUPER_ADMIN",
    "ROLE_ADMIN",
    "ROLE_MANAGER",
    "ROLE_TECHNICIAN",
    "ROLE_CUSTOMER",
    "ROLES",
    "PRIVILEGED_ROLES",
    "is_privileged",
]
