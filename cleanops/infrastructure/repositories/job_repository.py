"""Persistence layer for scheduled cleanings."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from sqlalchemy.orm import Session, joinedload

from cleanops.domain.entities import JOB_STATUS_COMPLETED, JOB_STATUS_SCHEDULED, Job
from cleanops.infrastructure.models import JobModel
from cleanops.utils import ensure_app_timezone


class JobRepository:
    """Read and update :class:`Job` records joined with their client."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_scheduled_on(self, day: date) -> Sequence[Job]:
        """Return jobs booked for ``day`` that are still in ``scheduled`` state."""

        query = (
            self.session.query(JobModel)
            .options(joinedload(JobModel.client))
            .filter(JobModel.date == day)
            .filter(JobModel.status == JOB_STATUS_SCHEDULED)
            .order_by(JobModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_completed_unpaid(self) -> Sequence[Job]:
        """Return completed jobs that have no payment date recorded."""

        query = (
            self.session.query(JobModel)
            .options(joinedload(JobModel.client))
            .filter(JobModel.status == JOB_STATUS_COMPLETED)
            .filter(JobModel.payment_date.is_(None))
            .order_by(JobModel.date.asc(), JobModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, job_id: int) -> Job | None:
        model = self.session.get(JobModel, job_id)
        return self._to_entity(model) if model else None

    def create(
        self,
        *,
        client_id: int | None,
        day: date,
        status: str = JOB_STATUS_SCHEDULED,
        service_value: float | None = None,
        payment_date: date | None = None,
    ) -> Job:
        model = JobModel(
            client_id=client_id,
            date=day,
            status=status,
            service_value=service_value,
            payment_date=payment_date,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(
        self, job_id: int, *, status: str, payment_date: date | None = None
    ) -> Job:
        model = self.session.get(JobModel, job_id)
        if model is None:
            msg = f"Job with id {job_id} not found"
            raise ValueError(msg)
        model.status = status
        model.payment_date = payment_date
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: JobModel) -> Job:
        client = model.client
        return Job(
            id=model.id,
            client_id=model.client_id,
            client_name=client.name if client is not None else None,
            client_address=client.address if client is not None else None,
            date=model.date,
            status=model.status,
            service_value=model.service_value,
            payment_date=model.payment_date,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["JobRepository"]
