"""Tests for the role-based notification visibility engine."""

from __future__ import annotations

import pytest

from servicedesk.application.use_cases.notifications import (
    ROLE_FILTER_VALUES,
    accessible_notifications,
    badge_label,
    compute_visible,
    has_unread,
    is_visible_to,
    unread_count,
)
from servicedesk.domain.entities import Notification, Viewer

ROLES = ("SUPER_ADMIN", "ADMIN", "MANAGER", "TECHNICIAN", "CUSTOMER")


def _notification(
    notification_id: str,
    *,
    user_id: str = "u-other",
    user_role: str = "TECHNICIAN",
    type: str = "info",
    timestamp: int = 1_000,
    read_by: tuple[str, ...] = (),
) -> Notification:
    return Notification(
        id=notification_id,
        user_id=user_id,
        user_role=user_role,
        type=type,
        title=f"Title {notification_id}",
        message=f"Message {notification_id}",
        timestamp=timestamp,
        read_by=read_by,
    )


def _mixed_collection() -> list[Notification]:
    """One notification per (author role, type) pair plus two owned by ``me``."""

    items = []
    counter = 0
    for role in ROLES:
        for kind in ("info", "success", "warning", "urgent", "mystery"):
            counter += 1
            items.append(
                _notification(
                    f"n{counter}",
                    user_id=f"author-{role.lower()}",
                    user_role=role,
                    type=kind,
                    timestamp=counter * 10,
                )
            )
    items.append(_notification("mine-1", user_id="me", user_role="ADMIN", timestamp=5))
    items.append(_notification("mine-2", user_id="me", user_role="CUSTOMER", timestamp=7))
    return items


@pytest.mark.parametrize("role", ["TECHNICIAN", "CUSTOMER"])
def test_self_scoped_roles_only_see_their_own_notifications(role):
    viewer = Viewer(id="me", role=role)

    result = compute_visible(_mixed_collection(), viewer, "all", "ALL", "newest")

    assert {item.id for item in result} == {"mine-1", "mine-2"}
    assert all(item.user_id == viewer.id for item in result)


def test_manager_never_sees_super_admin_admin_or_customer_activity():
    viewer = Viewer(id="me", role="MANAGER")

    result = compute_visible(_mixed_collection(), viewer, "all", "ALL", "newest")

    assert result
    assert {item.user_role for item in result} == {"MANAGER", "TECHNICIAN"}


def test_admin_sees_everything_except_super_admin_activity():
    viewer = Viewer(id="me", role="ADMIN")
    collection = _mixed_collection()

    result = compute_visible(collection, viewer, "all", "ALL", "newest")

    expected = {item.id for item in collection if item.user_role != "SUPER_ADMIN"}
    assert {item.id for item in result} == expected


def test_super_admin_without_filters_sees_the_whole_collection():
    viewer = Viewer(id="me", role="SUPER_ADMIN")
    collection = _mixed_collection()

    result = compute_visible(collection, viewer, "all", "ALL", "oldest")

    assert sorted(item.id for item in result) == sorted(item.id for item in collection)


@pytest.mark.parametrize("role", ["GUEST", "", "super_admin"])
def test_unknown_roles_see_nothing(role):
    viewer = Viewer(id="me", role=role)

    assert compute_visible(_mixed_collection(), viewer) == []
    assert not is_visible_to(_notification("x", user_id="me"), viewer)


def test_read_state_does_not_change_visibility():
    viewer = Viewer(id="me", role="TECHNICIAN")
    unread = _notification("a", user_id="me")
    read = _notification("b", user_id="me", read_by=("me",))

    assert accessible_notifications([unread, read], viewer) == [unread, read]


@pytest.mark.parametrize(
    ("category", "expected_types"),
    [
        ("all", {"info", "success", "warning", "urgent", "mystery"}),
        ("urgent", {"warning", "urgent"}),
        ("system", {"info", "success"}),
    ],
)
def test_category_buckets(category, expected_types):
    viewer = Viewer(id="me", role="SUPER_ADMIN")

    result = compute_visible(_mixed_collection(), viewer, category, "ALL", "newest")

    assert {item.type for item in result} == expected_types


def test_warning_shows_under_urgent_and_all_but_never_system():
    viewer = Viewer(id="me", role="SUPER_ADMIN")
    warning = _notification("w", type="warning")

    assert compute_visible([warning], viewer, "urgent") == [warning]
    assert compute_visible([warning], viewer, "all") == [warning]
    assert compute_visible([warning], viewer, "system") == []


def test_unknown_category_is_rejected():
    with pytest.raises(ValueError):
        compute_visible([], Viewer(id="me", role="ADMIN"), "important")


def test_unknown_sort_order_is_rejected():
    with pytest.raises(ValueError):
        compute_visible([], Viewer(id="me", role="ADMIN"), "all", "ALL", "random")


@pytest.mark.parametrize("role_filter", ROLE_FILTER_VALUES[1:])
def test_role_filter_narrows_privileged_views(role_filter):
    viewer = Viewer(id="me", role="SUPER_ADMIN")

    result = compute_visible(_mixed_collection(), viewer, "all", role_filter, "newest")

    assert result
    assert {item.user_role for item in result} == {role_filter}


def test_role_filter_applies_after_category_filter():
    viewer = Viewer(id="me", role="ADMIN")

    result = compute_visible(_mixed_collection(), viewer, "urgent", "MANAGER", "newest")

    assert {(item.user_role, item.type) for item in result} == {
        ("MANAGER", "warning"),
        ("MANAGER", "urgent"),
    }


def test_role_filter_is_ignored_for_non_privileged_viewers():
    viewer = Viewer(id="me", role="MANAGER")
    collection = _mixed_collection()

    filtered = compute_visible(collection, viewer, "all", "CUSTOMER", "newest")
    unfiltered = compute_visible(collection, viewer, "all", "ALL", "newest")

    assert filtered == unfiltered


def test_sort_orders():
    viewer = Viewer(id="me", role="SUPER_ADMIN")
    collection = [
        _notification("a", timestamp=100),
        _notification("b", timestamp=300),
        _notification("c", timestamp=200),
    ]

    newest = compute_visible(collection, viewer, sort_order="newest")
    oldest = compute_visible(collection, viewer, sort_order="oldest")

    assert [item.timestamp for item in newest] == [300, 200, 100]
    assert [item.timestamp for item in oldest] == [100, 200, 300]


def test_equal_timestamps_keep_collection_order():
    viewer = Viewer(id="me", role="SUPER_ADMIN")
    collection = [
        _notification("first", timestamp=100),
        _notification("second", timestamp=100),
        _notification("third", timestamp=100),
    ]

    for sort_order in ("newest", "oldest"):
        result = compute_visible(collection, viewer, sort_order=sort_order)
        assert [item.id for item in result] == ["first", "second", "third"]


def test_compute_visible_does_not_mutate_its_input():
    viewer = Viewer(id="me", role="SUPER_ADMIN")
    collection = [_notification("a", timestamp=1), _notification("b", timestamp=2)]
    snapshot = list(collection)

    compute_visible(collection, viewer, sort_order="newest")

    assert collection == snapshot


def test_unread_indicators_use_the_full_accessible_set():
    viewer = Viewer(id="tech-1", role="TECHNICIAN")
    collection = [
        _notification("a", user_id="tech-1", type="info"),
        _notification("b", user_id="tech-1", type="urgent", read_by=("tech-1",)),
        _notification("c", user_id="someone-else"),
    ]

    assert has_unread(collection, viewer) is True
    assert unread_count(collection, viewer) == 1
    # The category filter does not hide the unread ``info`` item from the badge.
    assert compute_visible(collection, viewer, "urgent") == [collection[1]]


def test_read_state_is_per_viewer():
    notification = _notification("a", user_role="MANAGER", read_by=("manager-1",))

    assert not has_unread([notification], Viewer(id="manager-1", role="MANAGER"))
    assert has_unread([notification], Viewer(id="admin-1", role="ADMIN"))


@pytest.mark.parametrize(
    ("count", "expected"),
    [(0, None), (1, "1"), (9, "9"), (10, "9+"), (42, "9+")],
)
def test_badge_label(count, expected):
    assert badge_label(count) == expected
