"""Tests for the relational backend."""

from datetime import timedelta

import pytest

from cleanops.domain.entities import (
    NotificationAudience,
    NotificationDraft,
    NotificationKind,
)
from cleanops.infrastructure.database import build_engine, build_session_factory
from cleanops.infrastructure.stores import (
    NotificationNotFoundError,
    SqlNotificationStore,
    StoreUnavailableError,
)
from cleanops.utils import start_of_day

from tests.support import TODAY, at


def _draft(subject="Acme Corp", *, kind=NotificationKind.SERVICE_REMINDER, audience=NotificationAudience.STAFF):
    return NotificationDraft(
        audience=audience,
        kind=kind,
        subject_key=subject,
        title="Cleaning today",
        body=f"{subject} at 12 Main St",
    )


def test_read_snapshot_joins_client_identity(sql_store, seed):
    acme = seed.client("Acme Corp", "1 Elm St")
    beta = seed.client("Beta LLC")
    seed.job(acme, TODAY)
    seed.job(acme, TODAY, status="in_progress")
    seed.job(beta, TODAY + timedelta(days=1))
    seed.job(beta, TODAY - timedelta(days=3), status="completed")
    paid = seed.job(beta, TODAY - timedelta(days=4), status="completed")
    seed.mark_paid(paid, TODAY - timedelta(days=1))
    seed.job(None, TODAY)

    snapshot = sql_store.read_snapshot(TODAY, start_of_day(TODAY - timedelta(days=1)))

    assert [(job.client_name, job.client_address) for job in snapshot.scheduled_jobs] == [
        ("Acme Corp", "1 Elm St"),
        (None, None),
    ]
    assert [job.client_name for job in snapshot.unpaid_jobs] == ["Beta LLC"]
    assert snapshot.unpaid_jobs[0].payment_date is None


def test_read_snapshot_quotation_cutoff_is_exclusive(sql_store, seed):
    cutoff = start_of_day(TODAY - timedelta(days=1))
    seed.quotation("Gamma Inc", at(TODAY - timedelta(days=2), 23, 59))
    seed.quotation("Fresh Ltd", cutoff)

    snapshot = sql_store.read_snapshot(TODAY, cutoff)

    assert [quotation.client_name for quotation in snapshot.stale_quotations] == ["Gamma Inc"]
    assert snapshot.stale_quotations[0].created_at.tzinfo is not None


def test_append_assigns_id_and_timestamp(sql_store, clock):
    saved = sql_store.append(_draft())

    assert saved.id is not None
    assert saved.created_at == clock()
    assert saved.read is False
    assert saved.subject_key == "Acme Corp"


def test_find_existing_matches_exact_key_within_window(sql_store, clock):
    sql_store.append(_draft("Ann"))
    since = start_of_day(TODAY)

    assert sql_store.find_existing(
        kind=NotificationKind.SERVICE_REMINDER,
        audience=NotificationAudience.STAFF,
        subject_key="Ann",
        since=since,
    ) is not None
    assert sql_store.find_existing(
        kind=NotificationKind.SERVICE_REMINDER,
        audience=NotificationAudience.STAFF,
        subject_key="Anna",
        since=since,
    ) is None
    assert sql_store.find_existing(
        kind=NotificationKind.PAYMENT_DUE,
        audience=NotificationAudience.STAFF,
        subject_key="Ann",
        since=since,
    ) is None
    assert sql_store.find_existing(
        kind=NotificationKind.SERVICE_REMINDER,
        audience=NotificationAudience.STAFF,
        subject_key="Ann",
        since=start_of_day(TODAY + timedelta(days=1)),
    ) is None


def test_inbox_lists_most_recent_first_and_marks_read(sql_store, clock):
    first = sql_store.append(_draft("Acme Corp"))
    clock.advance(minutes=5)
    second = sql_store.append(_draft("Beta LLC"))
    sql_store.append(_draft("Gamma Inc", kind=NotificationKind.QUOTE_PENDING, audience=NotificationAudience.ADMIN))

    staff = sql_store.list_for_audience(NotificationAudience.STAFF)
    assert [notification.id for notification in staff] == [second.id, first.id]
    assert sql_store.count_unread(NotificationAudience.STAFF) == 2

    assert sql_store.mark_as_read([first.id, "not-a-number", 9999]) == 1
    assert sql_store.count_unread(NotificationAudience.STAFF) == 1
    unread = sql_store.list_for_audience(NotificationAudience.STAFF, unread_only=True)
    assert [notification.id for notification in unread] == [second.id]
    assert sql_store.list_for_audience(NotificationAudience.STAFF, limit=1)[0].id == second.id


def test_mark_one_as_read_raises_for_unknown_id(sql_store):
    with pytest.raises(NotificationNotFoundError):
        sql_store.mark_one_as_read(12345)


def test_database_errors_become_store_unavailable(clock):
    engine = build_engine("sqlite://")
    store = SqlNotificationStore(build_session_factory(engine), clock=clock)

    try:
        with pytest.raises(StoreUnavailableError):
            store.find_existing(
                kind=NotificationKind.SERVICE_REMINDER,
                audience=NotificationAudience.STAFF,
                subject_key="Acme Corp",
                since=start_of_day(TODAY),
            )
        with pytest.raises(StoreUnavailableError):
            store.append(_draft())
    finally:
        engine.dispose()
