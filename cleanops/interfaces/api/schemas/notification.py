"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from cleanops.domain.entities import NotificationAudience, NotificationKind


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int | str] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[int | str]:
        """Return the list of identifiers without duplicates preserving order."""

        unique: list[int | str] = []
        seen: set[int | str] = set()
        for notification_id in self.ids:
            if notification_id in seen:
                continue
            seen.add(notification_id)
            unique.append(notification_id)
        return unique


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int | str
    audience: NotificationAudience
    kind: NotificationKind
    subject_key: str
    title: str
    body: str
    created_at: datetime | None = None
    read: bool = False


class UnreadCountRead(BaseModel):
    """Number of unread notifications for an audience."""

    audience: NotificationAudience
    unread: int


__all__ = ["NotificationMarkReadRequest", "NotificationRead", "UnreadCountRead"]
