"""Utility helpers to generate and dispatch feed notifications."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from servicedesk.config import get_settings
from servicedesk.domain.entities import (
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_URGENT,
    NOTIFICATION_TYPES,
    Notification,
    TICKET_PRIORITY_HIGH,
    TicketSnapshot,
    User,
)
from servicedesk.infrastructure.notifications import dispatch_notification
from servicedesk.infrastructure.repositories import NotificationRepository
from servicedesk.utils import now_epoch_millis

logger = logging.getLogger(__name__)

TICKETS_LINK = "tickets"


def _new_notification_id() -> str:
    return uuid.uuid4().hex


def _persist_notification(
    session: Session,
    *,
    actor: User,
    type: str,
    title: str,
    message: str,
    link: str | None = None,
) -> Notification:
    if actor.id is None:
        raise ValueError("The acting user must be persisted before notifying")

    notification = Notification(
        id=_new_notification_id(),
        user_id=actor.id,
        user_role=actor.role,
        user_name=actor.name,
        type=type,
        title=title,
        message=message,
        timestamp=now_epoch_millis(),
        read_by=(),
        link=link,
    )
    repository = NotificationRepository(
        session, retention_limit=get_settings().notification_retention_limit
    )
    saved = repository.add(notification)
    logger.info(
        "Notification %s (%s) recorded for %s %s", saved.id, saved.type, saved.user_role, saved.user_id
    )
    dispatch_notification(saved)
    return saved


def push_notification(
    session: Session,
    *,
    actor: User,
    type: str,
    title: str,
    message: str,
    link: str | None = None,
) -> Notification:
    """Record a notification about ``actor``'s activity and publish it."""

    if type not in NOTIFICATION_TYPES:
        raise ValueError(f"Unknown notification type '{type}'")
    return _persist_notification(
        session, actor=actor, type=type, title=title, message=message, link=link
    )


def notify_user_logged_in(session: Session, *, user: User) -> Notification:
    return _persist_notification(
        session,
        actor=user,
        type=NOTIFICATION_TYPE_INFO,
        title="System Access",
        message=f"{user.name} logged into the system.",
    )


def notify_user_logged_out(session: Session, *, user: User) -> Notification:
    return _persist_notification(
        session,
        actor=user,
        type=NOTIFICATION_TYPE_INFO,
        title="Session Ended",
        message=f"{user.name} logged out.",
    )


def notify_ticket_created(
    session: Session, *, actor: User, ticket: TicketSnapshot
) -> Notification | None:
    """Raise an urgent notification when a high priority ticket is opened."""

    if not ticket.is_high_priority:
        return None
    return _persist_notification(
        session,
        actor=actor,
        type=NOTIFICATION_TYPE_URGENT,
        title=f"URGENT: {ticket.device_label}",
        message=(
            f"New HIGH priority ticket created: {ticket.ticket_id}. "
            f"Issue: {ticket.issue_description}"
        ),
        link=TICKETS_LINK,
    )


def notify_ticket_priority_escalated(
    session: Session, *, actor: User, ticket: TicketSnapshot, previous_priority: str
) -> Notification | None:
    """Raise an urgent notification when a ticket is escalated to high priority."""

    if previous_priority == TICKET_PRIORITY_HIGH or not ticket.is_high_priority:
        return None
    return _persist_notification(
        session,
        actor=actor,
        type=NOTIFICATION_TYPE_URGENT,
        title=f"URGENT: {ticket.device_label}",
        message=(
            f"Ticket {ticket.ticket_id} escalated to HIGH priority. "
            f"Issue: {ticket.issue_description}"
        ),
        link=TICKETS_LINK,
    )


def notify_ticket_status_changed(
    session: Session, *, actor: User, ticket: TicketSnapshot, previous_status: str
) -> Notification | None:
    if previous_status == ticket.status:
        return None
    return _persist_notification(
        session,
        actor=actor,
        type=NOTIFICATION_TYPE_INFO,
        title=f"Status Update: {ticket.ticket_id}",
        message=(
            f"Ticket status changed from {previous_status} to {ticket.status}. "
            f"{ticket.device_label}"
        ),
        link=TICKETS_LINK,
    )


def notify_ticket_assigned(
    session: Session, *, actor: User, ticket: TicketSnapshot, assignee: User
) -> Notification:
    """Tell ``assignee`` about a new assignment.

    The notification is stamped with the assignee so that technicians, who
    only see their own notifications, receive it.
    """

    return _persist_notification(
        session,
        actor=assignee,
        type=NOTIFICATION_TYPE_INFO,
        title=f"Ticket Assigned: {ticket.ticket_id}",
        message=(
            f"{actor.name} assigned ticket {ticket.ticket_id} to {assignee.name}. "
            f"{ticket.device_label}"
        ),
        link=TICKETS_LINK,
    )


__all__ = [
    "push_notification",
    "notify_user_logged_in",
    "notify_user_logged_out",
    "notify_ticket_created",
    "notify_ticket_priority_escalated",
    "notify_ticket_status_changed",
    "notify_ticket_assigned",
]
