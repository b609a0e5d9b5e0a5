"""Shared fixtures for the reminder engine tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TIMEZONE"] = "America/New_York"
os.environ["REMINDER_SCHEDULER_ENABLED"] = "false"
os.environ.pop("FIRESTORE_PROJECT_ID", None)
os.environ.pop("FIRESTORE_CREDENTIALS_FILE", None)

from cleanops.infrastructure.database import (  # noqa: E402
    build_engine,
    build_session_factory,
    initialize_database,
)
from cleanops.infrastructure.stores import SqlNotificationStore  # noqa: E402
from tests.support import TODAY, FixedClock, Seeder, at  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(at(TODAY, 9))


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite://")
    initialize_database(bind=engine)
    factory = build_session_factory(engine)
    yield factory
    engine.dispose()


@pytest.fixture
def sql_store(session_factory, clock) -> SqlNotificationStore:
    return SqlNotificationStore(session_factory, clock=clock)


@pytest.fixture
def seed(session_factory) -> Seeder:
    return Seeder(session_factory)
