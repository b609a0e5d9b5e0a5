"""Helpers shared by the test modules."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from cleanops.domain.entities import Client
from cleanops.infrastructure.repositories import (
    ClientRepository,
    JobRepository,
    QuotationRepository,
)

APP_TZ = ZoneInfo("America/New_York")
TODAY = date(2026, 10, 18)


class FixedClock:
    """Clock returning a controllable instant in the application timezone."""

    def __init__(self, current: datetime) -> None:
        self.current = current

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)

    @property
    def today(self) -> date:
        return self.current.date()


class Seeder:
    """Insert business records through the repositories."""

    def __init__(self, session_factory) -> None:
        self._session_factory = session_factory

    def client(self, name: str, address: str | None = "12 Main St") -> int:
        with self._session_factory() as session:
            return ClientRepository(session).create(Client(id=None, name=name, address=address)).id

    def job(self, client_id: int | None, day: date, status: str = "scheduled", **kwargs) -> int:
        with self._session_factory() as session:
            return JobRepository(session).create(
                client_id=client_id, day=day, status=status, **kwargs
            ).id

    def mark_paid(self, job_id: int, paid_on: date) -> None:
        with self._session_factory() as session:
            JobRepository(session).update_status(job_id, status="completed", payment_date=paid_on)

    def quotation(self, client_name: str | None, created_at: datetime) -> int:
        with self._session_factory() as session:
            return QuotationRepository(session).create(
                client_name=client_name, created_at=created_at
            ).id


def at(day: date, hour: int = 9, minute: int = 0) -> datetime:
    """Return ``day`` at ``hour:minute`` in the application timezone."""

    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=APP_TZ)
