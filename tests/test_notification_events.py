from __future__ import annotations

import pytest

from servicedesk.application.use_cases.notifications import events
from servicedesk.domain.entities import TicketSnapshot, User
from servicedesk.infrastructure.repositories import NotificationRepository


@pytest.fixture()
def dispatched(monkeypatch):
    sent = []
    monkeypatch.setattr(events, "dispatch_notification", sent.append)
    return sent


def _user(user_id: str, name: str, role: str) -> User:
    return User(
        id=user_id,
        name=name,
        email=f"{user_id}@example.com",
        role=role,
        password="hashed",
    )


def _ticket(**overrides) -> TicketSnapshot:
    values = {
        "ticket_id": "T-1001",
        "device_type": "Laptop",
        "brand": "Dell",
        "issue_description": "Screen flickers",
        "priority": "High",
        "status": "Pending",
    }
    values.update(overrides)
    return TicketSnapshot(**values)


def test_login_notification_is_stamped_with_the_actor(db_session, dispatched):
    manager = _user("m-1", "Morgan", "MANAGER")

    notification = events.notify_user_logged_in(db_session, user=manager)

    assert notification.title == "System Access"
    assert notification.message == "Morgan logged into the system."
    assert notification.type == "info"
    assert (notification.user_id, notification.user_role) == ("m-1", "MANAGER")
    assert notification.read_by == ()
    assert dispatched == [notification]
    assert NotificationRepository(db_session).get(notification.id) == notification


def test_logout_notification(db_session, dispatched):
    notification = events.notify_user_logged_out(
        db_session, user=_user("t-1", "Taylor", "TECHNICIAN")
    )

    assert notification.title == "Session Ended"
    assert notification.message == "Taylor logged out."


def test_high_priority_ticket_creation_is_urgent(db_session, dispatched):
    notification = events.notify_ticket_created(
        db_session, actor=_user("c-1", "Casey", "CUSTOMER"), ticket=_ticket()
    )

    assert notification.type == "urgent"
    assert notification.title == "URGENT: Laptop • Dell"
    assert "T-1001" in notification.message
    assert notification.link == "tickets"


def test_regular_ticket_creation_is_silent(db_session, dispatched):
    result = events.notify_ticket_created(
        db_session, actor=_user("c-1", "Casey", "CUSTOMER"), ticket=_ticket(priority="Low")
    )

    assert result is None
    assert dispatched == []
    assert NotificationRepository(db_session).list_notifications() == []


@pytest.mark.parametrize(
    ("previous", "current", "expected"),
    [("Low", "High", True), ("Medium", "High", True), ("High", "High", False), ("Low", "Medium", False)],
)
def test_priority_escalation(db_session, dispatched, previous, current, expected):
    result = events.notify_ticket_priority_escalated(
        db_session,
        actor=_user("m-1", "Morgan", "MANAGER"),
        ticket=_ticket(priority=current),
        previous_priority=previous,
    )

    assert (result is not None) is expected


def test_status_change(db_session, dispatched):
    actor = _user("t-1", "Taylor", "TECHNICIAN")

    unchanged = events.notify_ticket_status_changed(
        db_session, actor=actor, ticket=_ticket(status="Pending"), previous_status="Pending"
    )
    changed = events.notify_ticket_status_changed(
        db_session, actor=actor, ticket=_ticket(status="In Progress"), previous_status="Pending"
    )

    assert unchanged is None
    assert changed.title == "Status Update: T-1001"
    assert "from Pending to In Progress" in changed.message


def test_assignment_is_visible_to_the_assignee(db_session, dispatched):
    manager = _user("m-1", "Morgan", "MANAGER")
    technician = _user("t-1", "Taylor", "TECHNICIAN")

    notification = events.notify_ticket_assigned(
        db_session, actor=manager, ticket=_ticket(), assignee=technician
    )

    assert notification.user_id == "t-1"
    assert notification.user_role == "TECHNICIAN"
    assert notification.message.startswith("Morgan assigned ticket T-1001 to Taylor.")


def test_push_notification_rejects_unknown_types(db_session, dispatched):
    with pytest.raises(ValueError):
        events.push_notification(
            db_session,
            actor=_user("a-1", "Alex", "ADMIN"),
            type="critical",
            title="Broken",
            message="Unknown type",
        )
    assert dispatched == []


def test_push_notification_requires_a_persisted_actor(db_session, dispatched):
    actor = _user("a-1", "Alex", "ADMIN")
    actor.id = None

    with pytest.raises(ValueError):
        events.push_notification(
            db_session, actor=actor, type="info", title="Hello", message="World"
        )


def test_dispatch_without_event_loop_is_skipped(db_session):
    # No running loop and no anyio portal: delivery is skipped, persistence still happens.
    notification = events.push_notification(
        db_session,
        actor=_user("a-1", "Alex", "ADMIN"),
        type="success",
        title="Backup finished",
        message="Nightly backup completed",
    )

    assert NotificationRepository(db_session).get(notification.id) is not None
