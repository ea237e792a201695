"""Shared fixtures: every test runs against a fresh in-memory SQLite database."""

from __future__ import annotations

import os

import pytest

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["NOTIFICATION_RETENTION_LIMIT"] = "50"


@pytest.fixture()
def fresh_schema():
    """Drop and recreate every table."""

    from servicedesk.infrastructure import database, models  # noqa: F401

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    yield database


@pytest.fixture()
def db_session(fresh_schema):
    session = fresh_schema.SessionLocal()
    try:
        yield session
    finally:
        session.close()
