"""Persistence layer for quotations."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy.orm import Session

from cleanops.domain.entities import Quotation
from cleanops.infrastructure.models import QuotationModel
from cleanops.utils import ensure_app_naive_datetime, ensure_app_timezone


class QuotationRepository:
    """Provide read access to :class:`Quotation` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_created_before(self, cutoff: datetime) -> Sequence[Quotation]:
        """Return quotations created strictly before ``cutoff``, oldest first."""

        query = (
            self.session.query(QuotationModel)
            .filter(QuotationModel.created_at < ensure_app_naive_datetime(cutoff))
            .order_by(QuotationModel.created_at.asc(), QuotationModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(
        self,
        *,
        client_name: str | None,
        total_value: float | None = None,
        created_at: datetime | None = None,
    ) -> Quotation:
        model = QuotationModel(client_name=client_name, total_value=total_value)
        if created_at is not None:
            model.created_at = ensure_app_naive_datetime(created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: QuotationModel) -> Quotation:
        return Quotation(
            id=model.id,
            client_name=model.client_name,
            total_value=model.total_value,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["QuotationRepository"]
