"""Endpoints and websocket handler for the notification feed."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from servicedesk.application.use_cases.notifications import (
    PERMISSION_DEFAULT,
    PERMISSION_DENIED,
    PERMISSION_GRANTED,
    NotificationFeed,
    badge_label,
    is_visible_to,
)
from servicedesk.application.use_cases.notifications.events import (
    notify_ticket_assigned,
    notify_ticket_created,
    notify_ticket_priority_escalated,
    notify_ticket_status_changed,
    push_notification,
)
from servicedesk.domain.entities import Notification, User, Viewer
from servicedesk.infrastructure.database import SessionLocal, get_db
from servicedesk.infrastructure.notifications import (
    FeedConnection,
    notification_manager,
    serialize_notification,
)
from servicedesk.infrastructure.repositories import (
    NotificationRepository,
    ScopedNotificationStore,
    UserRepository,
)
from servicedesk.interfaces.api.dependencies import (
    get_current_active_user,
    resolve_current_user,
)
from servicedesk.interfaces.api.schemas import (
    CategoryFilter,
    NotificationCreate,
    NotificationFeedRead,
    NotificationMutationResult,
    NotificationOpenResult,
    NotificationRead,
    RoleFilter,
    SortOrder,
    TicketEventCreate,
    TicketEventResult,
)
from servicedesk.utils import epoch_millis_to_datetime

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

_PERMISSIONS = {PERMISSION_GRANTED, PERMISSION_DENIED, PERMISSION_DEFAULT}


def _notification_to_schema(notification: Notification, viewer: Viewer) -> NotificationRead:
    return NotificationRead(
        id=notification.id,
        user_id=notification.user_id,
        user_role=notification.user_role,
        user_name=notification.user_name,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        timestamp=notification.timestamp,
        created_at=epoch_millis_to_datetime(notification.timestamp),
        read_by=list(notification.read_by),
        link=notification.link,
        is_read=notification.is_read_by(viewer.id),
    )


def _feed_to_schema(feed: NotificationFeed, items: list[Notification]) -> NotificationFeedRead:
    count = feed.unread_count()
    return NotificationFeedRead(
        items=[_notification_to_schema(item, feed.viewer) for item in items],
        unread_count=count,
        has_unread=count > 0,
        badge=badge_label(count),
    )


def _load_feed(db: Session, user: User) -> NotificationFeed:
    repository = NotificationRepository(db)
    return NotificationFeed(
        user.as_viewer(), repository, notifications=repository.list_notifications()
    )


def _get_visible_or_404(feed: NotificationFeed, notification_id: str) -> Notification:
    notification = feed.get(notification_id)
    if notification is None or not is_visible_to(notification, feed.viewer):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return notification


@router.get("/", response_model=NotificationFeedRead)
def list_notifications(
    category: CategoryFilter = Query("all"),
    role: RoleFilter = Query("ALL"),
    sort: SortOrder = Query("newest"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationFeedRead:
    """Return the notifications the authenticated user sees under the filters."""

    feed = _load_feed(db, current_user)
    return _feed_to_schema(feed, feed.visible(category, role, sort))


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    """Push a notification describing the authenticated user's activity."""

    try:
        notification = push_notification(
            db,
            actor=current_user,
            type=payload.type,
            title=payload.title,
            message=payload.message,
            link=payload.link,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _notification_to_schema(notification, current_user.as_viewer())


@router.post("/ticket-events", response_model=TicketEventResult)
def record_ticket_event(
    payload: TicketEventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> TicketEventResult:
    """Record ticket activity and return the notification it produced, if any.

    Only high priority creations, escalations to high priority, actual status
    changes and assignments produce a notification.
    """

    ticket = payload.ticket.to_snapshot()
    if payload.event == "created":
        notification = notify_ticket_created(db, actor=current_user, ticket=ticket)
    elif payload.event == "priority_changed":
        notification = notify_ticket_priority_escalated(
            db,
            actor=current_user,
            ticket=ticket,
            previous_priority=payload.previous_priority,
        )
    elif payload.event == "status_changed":
        notification = notify_ticket_status_changed(
            db, actor=current_user, ticket=ticket, previous_status=payload.previous_status
        )
    else:
        assignee = UserRepository(db).get(payload.assignee_id)
        if assignee is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Assignee not found")
        notification = notify_ticket_assigned(
            db, actor=current_user, ticket=ticket, assignee=assignee
        )

    if notification is None:
        return TicketEventResult(notification=None)
    return TicketEventResult(
        notification=_notification_to_schema(notification, current_user.as_viewer())
    )


@router.post("/read-all", response_model=NotificationMutationResult)
def mark_all_read(
    category: CategoryFilter = Query("all"),
    role: RoleFilter = Query("ALL"),
    sort: SortOrder = Query("newest"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationMutationResult:
    """Mark every notification of the current view as read."""

    feed = _load_feed(db, current_user)
    affected = feed.mark_all_visible_read(feed.visible(category, role, sort))
    return NotificationMutationResult(affected=affected)


@router.delete("/", response_model=NotificationMutationResult)
def clear_notifications(
    category: CategoryFilter = Query("all"),
    role: RoleFilter = Query("ALL"),
    sort: SortOrder = Query("newest"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationMutationResult:
    """Delete exactly the notifications of the current view."""

    feed = _load_feed(db, current_user)
    affected = feed.clear_visible(feed.visible(category, role, sort))
    return NotificationMutationResult(affected=affected)


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    feed = _load_feed(db, current_user)
    notification = _get_visible_or_404(feed, notification_id)
    feed.mark_one_read(notification)
    return _notification_to_schema(feed.get(notification_id) or notification, feed.viewer)


@router.post("/{notification_id}/open", response_model=NotificationOpenResult)
def open_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationOpenResult:
    """Acknowledge a notification and return where the client should navigate."""

    feed = _load_feed(db, current_user)
    notification = _get_visible_or_404(feed, notification_id)
    return NotificationOpenResult(id=notification.id, link=feed.open(notification))


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def dismiss_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    feed = _load_feed(db, current_user)
    feed.dismiss(_get_visible_or_404(feed, notification_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _init_message(feed: NotificationFeed) -> dict[str, Any]:
    count = feed.unread_count()
    return {
        "type": "init",
        "data": {
            "items": [serialize_notification(item) for item in feed.visible()],
            "unread_count": count,
            "badge": badge_label(count),
        },
    }


def _apply_preferences(connection: FeedConnection, data: Any) -> None:
    if not isinstance(data, dict):
        return
    preferences = connection.preferences
    if isinstance(data.get("sound_enabled"), bool):
        preferences.sound_enabled = data["sound_enabled"]
    if isinstance(data.get("surface_visible"), bool):
        preferences.surface_visible = data["surface_visible"]
    if data.get("desktop_permission") in _PERMISSIONS:
        preferences.desktop_permission = data["desktop_permission"]


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams the feed to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
        snapshot = NotificationRepository(session).list_notifications()
    except HTTPException:
        await websocket.close(code=1008)
        return
    finally:
        session.close()

    feed = NotificationFeed(
        user.as_viewer(), ScopedNotificationStore(SessionLocal), notifications=snapshot
    )
    connection = FeedConnection.open(websocket, feed)
    await notification_manager.connect(connection)
    try:
        # Catch up on anything published before the connection was registered.
        feed.refresh()
        await connection.send_json(_init_message(feed))
        for alert in connection.surface.drain():
            await connection.send_json(alert)
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await connection.send_json({"type": "pong"})
            elif message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list):
                    for notification_id in ids:
                        notification = feed.get(str(notification_id))
                        if notification is not None and is_visible_to(notification, feed.viewer):
                            feed.mark_one_read(notification)
            elif message_type == "preferences":
                _apply_preferences(connection, message.get("data"))
            elif message_type == "refresh":
                feed.refresh()
                await connection.send_json(_init_message(feed))
                for alert in connection.surface.drain():
                    await connection.send_json(alert)
    except WebSocketDisconnect:
        notification_manager.disconnect(connection)
    except Exception:
        notification_manager.disconnect(connection)
        raise
