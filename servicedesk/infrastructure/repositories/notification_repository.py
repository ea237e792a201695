"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from servicedesk.domain.entities import Notification
from servicedesk.infrastructure.models import NotificationModel, NotificationReadModel

logger = logging.getLogger(__name__)


class NotificationNotFoundError(ValueError):
    """Raised when a notification id is absent from the store."""

    def __init__(self, notification_id: str) -> None:
        super().__init__(f"Notification with id {notification_id} not found")
        self.notification_id = notification_id


class NotificationRepository:
    """Store :class:`Notification` objects in the relational database.

    Readers live in their own table with a unique ``(notification_id,
    viewer_id)`` pair, so acknowledging a notification is an insert and two
    viewers marking it at the same time never overwrite each other.
    """

    def __init__(self, session: Session, *, retention_limit: int | None = None) -> None:
        self.session = session
        self.retention_limit = retention_limit

    def list_notifications(self) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).order_by(
            NotificationModel.timestamp.asc(), NotificationModel.id.asc()
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, notification_id: str) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def add(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        model.readers = [
            NotificationReadModel(viewer_id=viewer_id)
            for viewer_id in dict.fromkeys(notification.read_by)
        ]
        self.session.add(model)
        self._commit()
        self.session.refresh(model)
        saved = self._to_entity(model)
        if self.retention_limit is not None:
            self.prune(self.retention_limit)
        return saved

    def append_reader(self, notification_id: str, viewer_id: str) -> None:
        if self.session.get(NotificationModel, notification_id) is None:
            raise NotificationNotFoundError(notification_id)

        exists = (
            self.session.query(NotificationReadModel.id)
            .filter(
                NotificationReadModel.notification_id == notification_id,
                NotificationReadModel.viewer_id == viewer_id,
            )
            .first()
        )
        if exists is not None:
            return

        self.session.add(
            NotificationReadModel(notification_id=notification_id, viewer_id=viewer_id)
        )
        try:
            self.session.commit()
        except IntegrityError:
            # A concurrent request already recorded the same reader.
            self.session.rollback()
            logger.debug(
                "Reader %s already recorded for notification %s", viewer_id, notification_id
            )
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def delete(self, notification_id: str) -> None:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            raise NotificationNotFoundError(notification_id)
        self.session.delete(model)
        self._commit()

    def prune(self, keep: int) -> int:
        """Delete everything but the ``keep`` newest notifications."""

        stale = (
            self.session.query(NotificationModel)
            .order_by(NotificationModel.timestamp.desc(), NotificationModel.id.desc())
            .offset(keep)
            .all()
        )
        if not stale:
            return 0
        for model in stale:
            self.session.delete(model)
        self._commit()
        logger.info("Pruned %s notifications beyond the newest %s", len(stale), keep)
        return len(stale)

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.id = notification.id
        model.user_id = notification.user_id
        model.user_role = notification.user_role
        model.user_name = notification.user_name
        model.type = notification.type
        model.title = notification.title
        model.message = notification.message
        model.timestamp = notification.timestamp
        model.link = notification.link

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            user_role=model.user_role,
            user_name=model.user_name,
            type=model.type,
            title=model.title,
            message=model.message,
            timestamp=model.timestamp,
            read_by=tuple(reader.viewer_id for reader in model.readers),
            link=model.link,
        )


__all__ = ["NotificationNotFoundError", "NotificationRepository"]
