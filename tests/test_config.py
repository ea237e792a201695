from __future__ import annotations

from datetime import timedelta, timezone

import pytest
from pydantic import ValidationError

from servicedesk.config import Settings, get_settings, reset_settings_cache
from servicedesk.utils.datetime import _resolve_timezone, epoch_millis_to_datetime


@pytest.fixture()
def fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


def test_settings_are_read_from_the_environment(monkeypatch, fresh_settings):
    monkeypatch.setenv("NOTIFICATION_RETENTION_LIMIT", "10")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "5")

    settings = get_settings()

    assert settings.notification_retention_limit == 10
    assert settings.access_token_expire_minutes == 5
    assert get_settings() is settings


def test_retention_limit_must_be_positive(monkeypatch):
    monkeypatch.setenv("NOTIFICATION_RETENTION_LIMIT", "0")

    with pytest.raises(ValidationError):
        Settings()


def test_blank_timezone_falls_back_to_utc(monkeypatch):
    monkeypatch.setenv("APP_TIMEZONE", "   ")

    assert Settings().app_timezone == "UTC"


@pytest.mark.parametrize(
    ("name", "offset"),
    [
        ("UTC+05:30", timedelta(hours=5, minutes=30)),
        ("GMT-03:00", timedelta(hours=-3)),
        ("Not/AZone", timedelta(0)),
    ],
)
def test_resolve_timezone_offsets(name, offset):
    assert _resolve_timezone(name).utcoffset(None) == offset


def test_resolve_timezone_by_name():
    resolved = _resolve_timezone("America/Lima")

    assert str(resolved) == "America/Lima"


def test_epoch_millis_to_datetime():
    moment = epoch_millis_to_datetime(1_700_000_000_000)

    assert moment.astimezone(timezone.utc).isoformat() == "2023-11-14T22:13:20+00:00"
    assert epoch_millis_to_datetime(None) is None
