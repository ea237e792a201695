from __future__ import annotations

import asyncio

from servicedesk.application.use_cases.notifications import AlertPreferences, NotificationFeed
from servicedesk.domain.entities import Notification, Viewer
from servicedesk.infrastructure.notifications import (
    FeedConnection,
    NotificationConnectionManager,
    NotificationPublisher,
    serialize_notification,
)


class FakeWebSocket:
    def __init__(self, fail: bool = False) -> None:
        self.accepted = False
        self.sent: list[dict] = []
        self.fail = fail
        self.attempts = 0

    async def accept(self):
        self.accepted = True

    async def send_json(self, message):
        self.attempts += 1
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


class NullStore:
    def list_notifications(self):
        return []

    def append_reader(self, notification_id, viewer_id):
        return None

    def delete(self, notification_id):
        return None


def _connection(viewer: Viewer, websocket: FakeWebSocket, preferences=None) -> FeedConnection:
    feed = NotificationFeed(viewer, NullStore(), notifications=[])
    return FeedConnection.open(websocket, feed, preferences)


def _notification(user_id: str, user_role: str, type: str = "info") -> Notification:
    return Notification(
        id="n-1",
        user_id=user_id,
        user_role=user_role,
        type=type,
        title="Ticket Assigned: T-1",
        message="Morgan assigned ticket T-1 to Taylor.",
        timestamp=1_700_000_000_000,
        link="tickets",
    )


def test_serialize_notification():
    payload = serialize_notification(_notification("t-1", "TECHNICIAN"))

    assert payload["id"] == "n-1"
    assert payload["read_by"] == []
    assert payload["link"] == "tickets"
    assert payload["created_at"].startswith("2023-11-14")


def test_deliver_reaches_only_viewers_allowed_to_see_it():
    manager = NotificationConnectionManager()
    technician_socket = FakeWebSocket()
    other_technician_socket = FakeWebSocket()
    admin_socket = FakeWebSocket()

    async def scenario():
        await manager.connect(_connection(Viewer("t-1", "TECHNICIAN"), technician_socket))
        await manager.connect(_connection(Viewer("t-2", "TECHNICIAN"), other_technician_socket))
        await manager.connect(_connection(Viewer("a-1", "ADMIN"), admin_socket))
        await manager.deliver(_notification("t-1", "TECHNICIAN"))

    asyncio.run(scenario())

    assert technician_socket.accepted
    assert technician_socket.sent[0]["type"] == "notification"
    assert admin_socket.sent[0]["data"]["id"] == "n-1"
    assert other_technician_socket.sent == []


def test_delivery_is_followed_by_alert_messages():
    manager = NotificationConnectionManager()
    websocket = FakeWebSocket()
    preferences = AlertPreferences(surface_visible=False, desktop_permission="granted")

    async def scenario():
        await manager.connect(_connection(Viewer("a-1", "ADMIN"), websocket, preferences))
        await manager.deliver(_notification("m-1", "MANAGER", type="urgent"))

    asyncio.run(scenario())

    kinds = [message.get("data", {}).get("kind") for message in websocket.sent[1:]]
    assert websocket.sent[0]["type"] == "notification"
    assert kinds == ["sound", "vibration", "desktop"]


def test_failing_sockets_are_dropped():
    manager = NotificationConnectionManager()
    broken = FakeWebSocket(fail=True)

    async def scenario():
        await manager.connect(_connection(Viewer("a-1", "ADMIN"), broken))
        await manager.deliver(_notification("m-1", "MANAGER"))
        await manager.deliver(_notification("m-1", "MANAGER"))

    asyncio.run(scenario())

    assert broken.attempts == 1


def test_disconnected_sockets_receive_nothing():
    manager = NotificationConnectionManager()
    websocket = FakeWebSocket()
    connection = _connection(Viewer("a-1", "ADMIN"), websocket)

    async def scenario():
        await manager.connect(connection)
        manager.disconnect(connection)
        manager.disconnect(connection)
        await manager.deliver(_notification("m-1", "MANAGER"))

    asyncio.run(scenario())

    assert websocket.accepted
    assert websocket.sent == []


def test_publisher_schedules_delivery_on_the_running_loop():
    manager = NotificationConnectionManager()
    websocket = FakeWebSocket()
    publisher = NotificationPublisher(manager)

    async def scenario():
        await manager.connect(_connection(Viewer("a-1", "ADMIN"), websocket))
        publisher.dispatch(_notification("m-1", "MANAGER"))
        await asyncio.sleep(0.01)

    asyncio.run(scenario())

    assert websocket.sent[0]["type"] == "notification"


def test_publisher_without_event_loop_does_not_raise():
    NotificationPublisher(NotificationConnectionManager()).dispatch(
        _notification("m-1", "MANAGER")
    )
