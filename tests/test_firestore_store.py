"""Tests for the document backend against an in-memory Firestore double."""

from __future__ import annotations

import itertools
import operator
from datetime import timedelta
from types import SimpleNamespace

import pytest
from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from cleanops.application.reminders import NotificationDelivery, ReminderScheduler
from cleanops.domain.entities import (
    NotificationAudience,
    NotificationDraft,
    NotificationKind,
)
from cleanops.infrastructure.stores import (
    FirestoreNotificationStore,
    NotificationNotFoundError,
    StoreUnavailableError,
)
from cleanops.utils import start_of_day

from tests.support import TODAY, at

_OPERATORS = {
    "==": operator.eq,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, db, collection, doc_id):
        self._db = db
        self._collection = collection
        self.id = doc_id

    def set(self, data):
        stored = {
            key: self._db.clock() if value is firestore.SERVER_TIMESTAMP else value
            for key, value in data.items()
        }
        self._db.data.setdefault(self._collection, {})[self.id] = stored
        self._db.notify(self._collection, FakeSnapshot(self.id, stored))

    def get(self):
        return FakeSnapshot(self.id, self._db.data.get(self._collection, {}).get(self.id))

    def update(self, changes):
        self._db.data[self._collection][self.id].update(changes)


class FakeQuery:
    def __init__(self, db, collection, filters=(), orders=(), limit=None):
        self._db = db
        self._collection = collection
        self._filters = tuple(filters)
        self._orders = tuple(orders)
        self._limit = limit

    def _copy(self, **changes):
        state = {"filters": self._filters, "orders": self._orders, "limit": self._limit}
        state.update(changes)
        return FakeQuery(self._db, self._collection, **state)

    def where(self, *, filter):
        return self._copy(filters=self._filters + ((filter.field_path, filter.op_string, filter.value),))

    def order_by(self, field, direction=firestore.Query.ASCENDING):
        return self._copy(orders=self._orders + ((field, direction),))

    def limit(self, count):
        return self._copy(limit=count)

    def matches(self, data):
        for field, op, value in self._filters:
            if field not in data or not _OPERATORS[op](data[field], value):
                return False
        return True

    def stream(self):
        if self._db.failure is not None:
            raise self._db.failure
        rows = [
            FakeSnapshot(doc_id, data)
            for doc_id, data in self._db.data.get(self._collection, {}).items()
            if self.matches(data)
        ]
        for field, direction in reversed(self._orders):
            rows.sort(
                key=lambda snap: snap.to_dict()[field],
                reverse=direction == firestore.Query.DESCENDING,
            )
        return iter(rows[: self._limit] if self._limit is not None else rows)

    def on_snapshot(self, callback):
        watcher = (self, callback)
        self._db.watchers.append(watcher)
        return SimpleNamespace(unsubscribe=lambda: self._db.watchers.remove(watcher))


class FakeCollection(FakeQuery):
    def document(self, doc_id=None):
        return FakeDocument(self._db, self._collection, doc_id or f"doc-{next(self._db.ids)}")


class FakeFirestore:
    def __init__(self, clock):
        self.clock = clock
        self.data = {}
        self.watchers = []
        self.failure = None
        self.ids = itertools.count(1)

    def collection(self, name):
        return FakeCollection(self, name)

    def add(self, collection, data, doc_id=None):
        self.collection(collection).document(doc_id).set(data)

    def notify(self, collection, snapshot):
        for query, callback in list(self.watchers):
            if query._collection == collection and query.matches(snapshot.to_dict()):
                change = SimpleNamespace(type=SimpleNamespace(name="ADDED"), document=snapshot)
                callback([snapshot], [change], self.clock())


@pytest.fixture
def db(clock):
    return FakeFirestore(clock)


@pytest.fixture
def store(db):
    return FirestoreNotificationStore(db)


def _draft(subject="Acme Corp", audience=NotificationAudience.STAFF):
    return NotificationDraft(
        audience=audience,
        kind=NotificationKind.SERVICE_REMINDER,
        subject_key=subject,
        title="Cleaning today",
        body=f"{subject} at 12 Main St",
    )


def test_read_snapshot_uses_denormalized_and_looked_up_clients(store, db):
    db.add("clients", {"name": "Beta LLC", "address": "9 Oak Ave"}, doc_id="c-beta")
    db.add("services", {"client_name": "Acme Corp", "client_address": "1 Elm St", "date": TODAY.isoformat(), "status": "scheduled"})
    db.add("services", {"client_id": "c-beta", "date": TODAY.isoformat(), "status": "scheduled"})
    db.add("services", {"client_name": "Later Co", "date": (TODAY + timedelta(days=1)).isoformat(), "status": "scheduled"})
    db.add("services", {"client_name": "Unpaid Co", "date": "2026-10-12", "status": "completed", "payment_date": ""})
    db.add("services", {"client_name": "Paid Co", "date": "2026-10-11", "status": "completed", "payment_date": "2026-10-13"})
    db.add("quotations", {"client_name": "Gamma Inc", "created_at": at(TODAY - timedelta(days=3))})
    db.add("quotations", {"client_name": "Fresh Ltd", "created_at": at(TODAY, 8)})

    snapshot = store.read_snapshot(TODAY, start_of_day(TODAY - timedelta(days=1)))

    assert sorted((job.client_name, job.client_address) for job in snapshot.scheduled_jobs) == [
        ("Acme Corp", "1 Elm St"),
        ("Beta LLC", "9 Oak Ave"),
    ]
    assert [job.client_name for job in snapshot.unpaid_jobs] == ["Unpaid Co"]
    assert [quotation.client_name for quotation in snapshot.stale_quotations] == ["Gamma Inc"]


def test_append_uses_server_timestamp_and_inbox_fields(store, db, clock):
    saved = store.append(_draft())

    raw = db.data["notifications"][saved.id]
    assert raw["user_role"] == "staff"
    assert raw["message"] == "Acme Corp at 12 Main St"
    assert raw["is_read"] is False
    assert saved.created_at == clock()
    assert saved.read is False


def test_find_existing_and_inbox_queries(store, clock):
    first = store.append(_draft("Ann"))
    clock.advance(minutes=1)
    second = store.append(_draft("Anna"))
    store.append(_draft("Ann", audience=NotificationAudience.ADMIN))

    found = store.find_existing(
        kind=NotificationKind.SERVICE_REMINDER,
        audience=NotificationAudience.STAFF,
        subject_key="Ann",
        since=start_of_day(TODAY),
    )
    assert found.id == first.id
    assert store.find_existing(
        kind=NotificationKind.SERVICE_REMINDER,
        audience=NotificationAudience.STAFF,
        subject_key="Ann",
        since=start_of_day(TODAY + timedelta(days=1)),
    ) is None

    assert [n.id for n in store.list_for_audience(NotificationAudience.STAFF)] == [second.id, first.id]
    assert store.mark_as_read([first.id, "missing"]) == 1
    assert store.count_unread(NotificationAudience.STAFF) == 1
    assert [n.id for n in store.list_for_audience(NotificationAudience.STAFF, unread_only=True)] == [second.id]

    with pytest.raises(NotificationNotFoundError):
        store.mark_one_as_read("missing")


def test_subscribe_receives_new_notifications_until_unsubscribed(store):
    received = []
    unsubscribe = store.subscribe(NotificationAudience.ADMIN, received.extend)

    store.append(_draft(audience=NotificationAudience.STAFF))
    admin = store.append(_draft("Beta LLC", audience=NotificationAudience.ADMIN))
    unsubscribe()
    store.append(_draft("Gamma Inc", audience=NotificationAudience.ADMIN))

    assert [n.id for n in received] == [admin.id]


def test_notifications_with_unknown_role_or_kind_are_skipped(store, db, clock):
    received = []
    unsubscribe = store.subscribe(NotificationAudience.ADMIN, received.extend)
    db.add("notifications", {"user_role": "admin", "message": "legacy", "is_read": False, "created_at": clock()})
    db.add("notifications", {"user_role": "admin", "kind": "birthday", "is_read": False, "created_at": clock()})
    clock.advance(minutes=1)
    valid = store.append(_draft("Beta LLC", audience=NotificationAudience.ADMIN))
    unsubscribe()

    assert [n.id for n in store.list_for_audience(NotificationAudience.ADMIN)] == [valid.id]
    assert store.count_unread(NotificationAudience.ADMIN) == 1
    assert [n.id for n in received] == [valid.id]


def test_api_errors_become_store_unavailable(store, db):
    db.failure = google_exceptions.ServiceUnavailable("backend down")

    with pytest.raises(StoreUnavailableError):
        store.read_snapshot(TODAY, start_of_day(TODAY))
    with pytest.raises(StoreUnavailableError):
        store.count_unread(NotificationAudience.STAFF)


@pytest.mark.anyio
async def test_scan_against_documents_is_idempotent(store, db, clock):
    db.add("services", {"client_name": "Acme Corp", "client_address": "1 Elm St", "date": TODAY.isoformat(), "status": "scheduled"})
    db.add("services", {"client_name": "Unpaid Co", "date": "2026-10-12", "status": "completed"})
    scheduler = ReminderScheduler(store, NotificationDelivery(store, None), clock=clock)

    first = await scheduler.tick()
    clock.advance(minutes=1)
    second = await scheduler.tick()

    assert (first.candidates, first.admitted) == (2, 2)
    assert (second.admitted, second.suppressed) == (0, 2)
    assert len(db.data["notifications"]) == 2
