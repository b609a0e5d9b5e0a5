"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from cleanops.domain.entities import (
    Notification,
    NotificationAudience,
    NotificationDraft,
    NotificationKind,
)
from cleanops.infrastructure.models import NotificationModel
from cleanops.utils import ensure_app_naive_datetime, ensure_app_timezone


class NotificationRepository:
    """Provide the write path and the inbox queries for notifications."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_audience(
        self,
        audience: NotificationAudience,
        *,
        limit: int | None = 20,
        unread_only: bool = False,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.audience == audience.value
        )
        if unread_only:
            query = query.filter(NotificationModel.read.is_(False))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, audience: NotificationAudience) -> int:
        return (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.audience == audience.value)
            .filter(NotificationModel.read.is_(False))
            .scalar()
            or 0
        )

    def find_existing(
        self,
        *,
        kind: NotificationKind,
        audience: NotificationAudience,
        subject_key: str,
        since: datetime,
    ) -> Notification | None:
        """Return the newest notification matching the dedup key since ``since``."""

        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.kind == kind.value)
            .filter(NotificationModel.audience == audience.value)
            .filter(NotificationModel.subject_key == subject_key)
            .filter(NotificationModel.created_at >= ensure_app_naive_datetime(since))
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, draft: NotificationDraft, *, created_at: datetime) -> Notification:
        model = NotificationModel(
            audience=draft.audience.value,
            kind=draft.kind.value,
            subject_key=draft.subject_key,
            title=draft.title,
            body=draft.body,
            created_at=ensure_app_naive_datetime(created_at),
            read=False,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_ids: Iterable[int]) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id.in_(ids))
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            audience=NotificationAudience(model.audience),
            kind=NotificationKind(model.kind),
            subject_key=model.subject_key,
            title=model.title,
            body=model.body,
            created_at=ensure_app_timezone(model.created_at),
            read=bool(model.read),
        )


__all__ = ["NotificationRepository"]
