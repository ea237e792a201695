"""Use case for creating users."""

import uuid

from sqlalchemy.orm import Session

from servicedesk.domain.entities import ROLES, User
from servicedesk.infrastructure.repositories import UserRepository
from servicedesk.infrastructure.security import get_password_hash


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    role: str,
    password: str,
) -> User:
    """Create a new user ensuring unique email addresses and a known role."""

    repository = UserRepository(session)

    if repository.get_by_email(email):
        raise ValueError("Email address is already registered")

    normalized_role = role.strip().upper()
    if normalized_role not in ROLES:
        raise ValueError(f"Unknown role '{role}'")

    user = User(
        id=uuid.uuid4().hex,
        name=name.strip(),
        email=email.strip().lower(),
        role=normalized_role,
        password=get_password_hash(password),
        is_active=True,
    )
    return repository.create(user)
