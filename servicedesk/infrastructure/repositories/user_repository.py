"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from servicedesk.domain.entities import User
from servicedesk.infrastructure.models import UserModel


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        if user.id is None:
            raise ValueError("User id is required to create a user")
        model = UserModel(
            id=user.id,
            name=user.name,
            email=user.email.strip().lower(),
            role=user.role,
            password=user.password,
            is_active=user.is_active,
        )
        if user.created_at is not None:
            model.created_at = user.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=model.role,
            password=model.password,
            is_active=model.is_active,
            created_at=model.created_at,
        )


__all__ = ["UserRepository"]
