"""SQLAlchemy models for persisted notifications and their readers."""

from sqlalchemy import BigInteger, Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from servicedesk.infrastructure.database import Base


class NotificationModel(Base):
    """Database representation for feed notifications."""

    __tablename__ = "notification"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    user_role = Column(String(20), nullable=False, index=True)
    user_name = Column(String(120), nullable=True)
    type = Column(String(20), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    timestamp = Column(BigInteger, nullable=False, index=True)
    link = Column(String(100), nullable=True)

    readers = relationship(
        "NotificationReadModel",
        back_populates="notification",
        cascade="all, delete-orphan",
        order_by="NotificationReadModel.id",
        lazy="selectin",
    )


class NotificationReadModel(Base):
    """One acknowledgement of a notification by a viewer."""

    __tablename__ = "notification_read"
    __table_args__ = (
        UniqueConstraint("notification_id", "viewer_id", name="uq_notification_read_viewer"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    notification_id = Column(
        String(64),
        ForeignKey("notification.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    viewer_id = Column(String(64), nullable=False)

    notification = relationship("NotificationModel", back_populates="readers")


__all__ = ["NotificationModel", "NotificationReadModel"]
