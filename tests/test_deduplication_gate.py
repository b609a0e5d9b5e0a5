"""Tests for the once-per-day suppression rule."""

from datetime import timedelta

import pytest

from cleanops.application.reminders import DeduplicationGate
from cleanops.domain.entities import (
    NotificationAudience,
    NotificationKind,
    ReminderCandidate,
)
from cleanops.infrastructure.stores import StoreUnavailableError
from cleanops.utils import start_of_day

from tests.support import TODAY


def _candidate(subject="Acme Corp", kind=NotificationKind.SERVICE_REMINDER, audience=NotificationAudience.STAFF):
    return ReminderCandidate(
        kind=kind,
        audience=audience,
        subject_key=subject,
        title="Cleaning today",
        body=f"{subject} at 12 Main St",
    )


@pytest.mark.anyio
async def test_admits_once_per_day(sql_store):
    gate = DeduplicationGate(sql_store)
    candidate = _candidate()
    day_start = start_of_day(TODAY)

    assert await gate.admit(candidate, day_start) is True
    sql_store.append(candidate.to_draft())
    assert await gate.admit(candidate, day_start) is False


@pytest.mark.anyio
async def test_same_subject_under_other_kind_or_audience_is_admitted(sql_store):
    gate = DeduplicationGate(sql_store)
    sql_store.append(_candidate().to_draft())
    day_start = start_of_day(TODAY)

    assert await gate.admit(
        _candidate(kind=NotificationKind.PAYMENT_DUE, audience=NotificationAudience.ADMIN), day_start
    ) is True
    assert await gate.admit(_candidate(audience=NotificationAudience.ADMIN), day_start) is True


@pytest.mark.anyio
async def test_names_sharing_a_prefix_do_not_suppress_each_other(sql_store):
    gate = DeduplicationGate(sql_store)
    sql_store.append(_candidate("Ann").to_draft())

    assert await gate.admit(_candidate("Anna"), start_of_day(TODAY)) is True
    assert await gate.admit(_candidate("An"), start_of_day(TODAY)) is True


@pytest.mark.anyio
async def test_window_resets_at_local_midnight(sql_store, clock):
    gate = DeduplicationGate(sql_store)
    clock.current = clock.current.replace(hour=23, minute=59)
    sql_store.append(_candidate().to_draft())

    tomorrow = TODAY + timedelta(days=1)
    assert await gate.admit(_candidate(), start_of_day(TODAY)) is False
    assert await gate.admit(_candidate(), start_of_day(tomorrow)) is True


@pytest.mark.anyio
async def test_store_failure_propagates():
    class UnavailableStore:
        def find_existing(self, **_kwargs):
            raise StoreUnavailableError("offline")

    gate = DeduplicationGate(UnavailableStore())

    with pytest.raises(StoreUnavailableError):
        await gate.admit(_candidate(), start_of_day(TODAY))
