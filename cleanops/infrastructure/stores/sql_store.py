"""Relational backend built on the SQLAlchemy repositories."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from datetime import date, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from cleanops.domain.entities import (
    Notification,
    NotificationAudience,
    NotificationDraft,
    NotificationKind,
    ScanSnapshot,
)
from cleanops.infrastructure.repositories import (
    JobRepository,
    NotificationRepository,
    QuotationRepository,
)
from cleanops.utils import now_in_app_timezone

from .base import NotificationStore
from .errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class SqlNotificationStore(NotificationStore):
    """Serve the reminder engine and the inbox from a SQL database.

    Every call opens its own short-lived session so the store can be used from
    worker threads. ``clock`` assigns ``created_at`` on append; it is the
    database process clock in production and a fixed clock in tests.
    """

    name = "sql"
    supports_subscriptions = False

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            session.rollback()
            logger.warning("SQL store failed during %s: %s", operation, exc)
            raise StoreUnavailableError(f"SQL store failed during {operation}") from exc
        finally:
            session.close()

    def read_snapshot(self, today: date, quote_cutoff: datetime) -> ScanSnapshot:
        with self._session("read_snapshot") as session:
            jobs = JobRepository(session)
            scheduled = tuple(jobs.list_scheduled_on(today))
            unpaid = tuple(jobs.list_completed_unpaid())
            quotations = tuple(
                QuotationRepository(session).list_created_before(quote_cutoff)
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
        with self._session("find_existing") as session:
            return NotificationRepository(session).find_existing(
                kind=kind, audience=audience, subject_key=subject_key, since=since
            )

    def append(self, draft: NotificationDraft) -> Notification:
        with self._session("append") as session:
            return NotificationRepository(session).create(draft, created_at=self._clock())

    def list_for_audience(
        self,
        audience: NotificationAudience,
        *,
        limit: int | None = 20,
        unread_only: bool = False,
    ) -> Sequence[Notification]:
        with self._session("list_for_audience") as session:
            return NotificationRepository(session).list_for_audience(
                audience, limit=limit, unread_only=unread_only
            )

    def count_unread(self, audience: NotificationAudience) -> int:
        with self._session("count_unread") as session:
            return NotificationRepository(session).count_unread(audience)

    def mark_as_read(self, notification_ids: Iterable[int | str]) -> int:
        ids: list[int] = []
        for notification_id in notification_ids:
            try:
                ids.append(int(notification_id))
            except (TypeError, ValueError):
                continue
        with self._session("mark_as_read") as session:
            return NotificationRepository(session).mark_as_read(ids)


__all__ = ["SqlNotificationStore"]
