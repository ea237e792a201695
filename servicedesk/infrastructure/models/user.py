"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, String, func

from servicedesk.infrastructure.database import Base


class UserModel(Base):
    """Database representation of a service desk account."""

    __tablename__ = "user"

    id = Column(String(64), primary_key=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    role = Column(String(20), nullable=False)
    password = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["UserModel"]
