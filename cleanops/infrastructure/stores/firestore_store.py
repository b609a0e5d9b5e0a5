"""Document backend built on Google Cloud Firestore.

The collections follow the layout the dashboards already write:

* ``services``: one document per cleaning with ``client_id``, a denormalized
  ``client_name``/``client_address``, ``date`` as ``YYYY-MM-DD``, ``status`` and
  ``payment_date`` (empty string or missing while unpaid).
* ``clients``: client identity, used when a service lacks the denormalized name.
* ``quotations``: ``client_name``, ``total_value`` and a ``created_at`` timestamp.
* ``notifications``: ``user_role``, ``kind``, ``subject_key``, ``title``,
  ``message``, ``created_at`` (server timestamp) and ``is_read``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from google.oauth2 import service_account

from cleanops.domain.entities import (
    JOB_STATUS_COMPLETED,
    JOB_STATUS_SCHEDULED,
    Job,
    Notification,
    NotificationAudience,
    NotificationDraft,
    NotificationKind,
    Quotation,
    ScanSnapshot,
)
from cleanops.utils import ensure_app_timezone

from .base import NotificationCallback, NotificationStore, Unsubscribe
from .errors import StoreUnavailableError

logger = logging.getLogger(__name__)

SERVICES_COLLECTION = "services"
CLIENTS_COLLECTION = "clients"
QUOTATIONS_COLLECTION = "quotations"
NOTIFICATIONS_COLLECTION = "notifications"

_TRANSIENT_ERRORS = (google_exceptions.GoogleAPICallError, google_exceptions.RetryError)


class FirestoreNotificationStore(NotificationStore):
    """Serve the reminder engine and the inbox from Firestore collections."""

    name = "firestore"
    supports_subscriptions = True

    def __init__(self, client: firestore.Client, *, subscription_limit: int = 20) -> None:
        self._client = client
        self._subscription_limit = subscription_limit

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except _TRANSIENT_ERRORS as exc:
            logger.warning("Firestore failed during %s: %s", operation, exc)
            raise StoreUnavailableError(f"Firestore failed during {operation}") from exc

    def _collection(self, name: str):
        return self._client.collection(name)

    def read_snapshot(self, today: date, quote_cutoff: datetime) -> ScanSnapshot:
        with self._guard("read_snapshot"):
            client_cache: dict[str, dict[str, Any] | None] = {}
            scheduled_query = (
                self._collection(SERVICES_COLLECTION)
                .where(filter=FieldFilter("date", "==", today.isoformat()))
                .where(filter=FieldFilter("status", "==", JOB_STATUS_SCHEDULED))
            )
            scheduled = tuple(
                job
                for job in (
                    self._to_job(doc, client_cache) for doc in scheduled_query.stream()
                )
                if job is not None
            )

            # Unpaid services keep ``payment_date`` as an empty string, which an
            # equality filter cannot combine with "missing", so filter in memory.
            completed_query = self._collection(SERVICES_COLLECTION).where(
                filter=FieldFilter("status", "==", JOB_STATUS_COMPLETED)
            )
            unpaid = tuple(
                job
                for job in (
                    self._to_job(doc, client_cache) for doc in completed_query.stream()
                )
                if job is not None and job.payment_date is None
            )

            quotation_query = (
                self._collection(QUOTATIONS_COLLECTION)
                .where(filter=FieldFilter("created_at", "<", quote_cutoff))
                .order_by("created_at")
            )
            quotations = tuple(
                quotation
                for quotation in (
                    self._to_quotation(doc) for doc in quotation_query.stream()
                )
                if quotation is not None
            )
        return ScanSnapshot(
            today=today,
            scheduled_jobs=scheduled,
            unpaid_jobs=unpaid,
            stale_quotations=quotations,
        )

    def find_existing(
        self,
        *,
        kind: NotificationKind,
        audience: NotificationAudience,
        subject_key: str,
        since: datetime,
    ) -> Notification | None:
        with self._guard("find_existing"):
            query = (
                self._collection(NOTIFICATIONS_COLLECTION)
                .where(filter=FieldFilter("kind", "==", kind.value))
                .where(filter=FieldFilter("user_role", "==", audience.value))
                .where(filter=FieldFilter("subject_key", "==", subject_key))
                .where(filter=FieldFilter("created_at", ">=", since))
                .limit(1)
            )
            for doc in query.stream():
                notification = self._to_notification(doc)
                if notification is not None:
                    return notification
        return None

    def append(self, draft: NotificationDraft) -> Notification:
        with self._guard("append"):
            doc_ref = self._collection(NOTIFICATIONS_COLLECTION).document()
            doc_ref.set(
                {
                    "user_role": draft.audience.value,
                    "kind": draft.kind.value,
                    "subject_key": draft.subject_key,
                    "title": draft.title,
                    "message": draft.body,
                    "created_at": firestore.SERVER_TIMESTAMP,
                    "is_read": False,
                }
            )
            # Read back so the caller gets the timestamp the server assigned.
            saved = self._to_notification(doc_ref.get())
        if saved is None:
            raise StoreUnavailableError(f"Notification {doc_ref.id} could not be read back")
        return saved

    def subscribe(
        self, audience: NotificationAudience, callback: NotificationCallback
    ) -> Unsubscribe:
        query = (
            self._collection(NOTIFICATIONS_COLLECTION)
            .where(filter=FieldFilter("user_role", "==", audience.value))
            .order_by("created_at", direction=firestore.Query.DESCENDING)
            .limit(self._subscription_limit)
        )

        def _on_snapshot(_docs, changes, _read_time) -> None:
            added = [
                notification
                for notification in (
                    self._to_notification(change.document)
                    for change in changes
                    if change.type.name == "ADDED"
                )
                if notification is not None
            ]
            if added:
                callback(added)

        with self._guard("subscribe"):
            watch = query.on_snapshot(_on_snapshot)
        return watch.unsubscribe

    def list_for_audience(
        self,
        audience: NotificationAudience,
        *,
        limit: int | None = 20,
        unread_only: bool = False,
    ) -> Sequence[Notification]:
        with self._guard("list_for_audience"):
            query = self._collection(NOTIFICATIONS_COLLECTION).where(
                filter=FieldFilter("user_role", "==", audience.value)
            )
            if unread_only:
                query = query.where(filter=FieldFilter("is_read", "==", False))
            query = query.order_by("created_at", direction=firestore.Query.DESCENDING)
            if limit is not None:
                query = query.limit(limit)
            notifications = (self._to_notification(doc) for doc in query.stream())
            return [notification for notification in notifications if notification is not None]

    def count_unread(self, audience: NotificationAudience) -> int:
        with self._guard("count_unread"):
            query = (
                self._collection(NOTIFICATIONS_COLLECTION)
                .where(filter=FieldFilter("user_role", "==", audience.value))
                .where(filter=FieldFilter("is_read", "==", False))
            )
            return sum(1 for doc in query.stream() if self._to_notification(doc) is not None)

    def mark_as_read(self, notification_ids: Iterable[int | str]) -> int:
        updated = 0
        with self._guard("mark_as_read"):
            collection = self._collection(NOTIFICATIONS_COLLECTION)
            for notification_id in dict.fromkeys(str(i) for i in notification_ids if i):
                doc_ref = collection.document(notification_id)
                if not doc_ref.get().exists:
                    continue
                doc_ref.update({"is_read": True})
                updated += 1
        return updated

    def _to_job(self, doc, client_cache: dict[str, dict[str, Any] | None]) -> Job | None:
        data = doc.to_dict() or {}
        raw_date = data.get("date")
        try:
            job_date = _parse_date(raw_date)
        except ValueError:
            logger.debug("Skipping service %s with unreadable date %r", doc.id, raw_date)
            return None
        if job_date is None:
            return None

        client_name = data.get("client_name")
        client_address = data.get("client_address")
        client_id = data.get("client_id")
        if not client_name and client_id:
            client = self._lookup_client(str(client_id), client_cache)
            if client is not None:
                client_name = client.get("name")
                client_address = client_address or client.get("address")

        try:
            payment_date = _parse_date(data.get("payment_date"))
        except ValueError:
            payment_date = None

        return Job(
            id=doc.id,
            client_id=client_id,
            client_name=client_name,
            client_address=client_address,
            date=job_date,
            status=str(data.get("status") or ""),
            service_value=data.get("service_value"),
            payment_date=payment_date,
            created_at=_as_datetime(data.get("created_at")),
        )

    def _lookup_client(
        self, client_id: str, cache: dict[str, dict[str, Any] | None]
    ) -> dict[str, Any] | None:
        if client_id not in cache:
            snapshot = self._collection(CLIENTS_COLLECTION).document(client_id).get()
            cache[client_id] = snapshot.to_dict() if snapshot.exists else None
        return cache[client_id]

    @staticmethod
    def _to_quotation(doc) -> Quotation | None:
        data = doc.to_dict() or {}
        created_at = _as_datetime(data.get("created_at"))
        if created_at is None:
            return None
        return Quotation(
            id=doc.id,
            client_name=data.get("client_name"),
            total_value=data.get("total_value"),
            created_at=created_at,
        )

    @staticmethod
    def _to_notification(doc) -> Notification | None:
        data = doc.to_dict() or {}
        try:
            audience = NotificationAudience(data.get("user_role"))
            kind = NotificationKind(data.get("kind"))
        except ValueError:
            logger.debug("Skipping notification %s with unknown role or kind", doc.id)
            return None
        return Notification(
            id=doc.id,
            audience=audience,
            kind=kind,
            subject_key=data.get("subject_key") or "",
            title=data.get("title") or "",
            body=data.get("message") or "",
            created_at=_as_datetime(data.get("created_at")),
            read=bool(data.get("is_read")),
        )


def _parse_date(value: Any) -> date | None:
    """Accept ``date``/``datetime`` objects and ISO strings, empty means unset."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_app_timezone(value).date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return ensure_app_timezone(value)
    if isinstance(value, str) and value:
        try:
            return ensure_app_timezone(datetime.fromisoformat(value))
        except ValueError:
            return None
    return None


def build_firestore_client(
    *,
    project_id: str,
    credentials_file: str | None = None,
    database: str | None = None,
) -> firestore.Client:
    """Create a Firestore client for ``project_id``."""

    kwargs: dict[str, Any] = {"project": project_id}
    if credentials_file:
        kwargs["credentials"] = service_account.Credentials.from_service_account_file(
            credentials_file
        )
    if database:
        kwargs["database"] = database
    return firestore.Client(**kwargs)


__all__ = [
    "CLIENTS_COLLECTION",
    "FirestoreNotificationStore",
    "NOTIFICATIONS_COLLECTION",
    "QUOTATIONS_COLLECTION",
    "SERVICES_COLLECTION",
    "build_firestore_client",
]
