"""Persistence helpers for client records."""

from __future__ import annotations

from sqlalchemy.orm import Session

from cleanops.domain.entities import Client
from cleanops.infrastructure.models import ClientModel
from cleanops.utils import ensure_app_naive_datetime, ensure_app_timezone


class ClientRepository:
    """Provide the handful of client operations the backend needs."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, client_id: int) -> Client | None:
        model = self.session.get(ClientModel, client_id)
        return self._to_entity(model) if model else None

    def create(self, client: Client) -> Client:
        model = ClientModel(
            name=client.name,
            address=client.address,
            type=client.type,
            email=client.email,
            phone=client.phone,
        )
        if client.created_at is not None:
            model.created_at = ensure_app_naive_datetime(client.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ClientModel) -> Client:
        return Client(
            id=model.id,
            name=model.name,
            address=model.address,
            type=model.type,
            email=model.email,
            phone=model.phone,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ClientRepository"]
