"""Domain entities describing reminder notifications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationAudience(str, Enum):
    """Role based group of users a notification targets."""

    ADMIN = "admin"
    STAFF = "staff"


class NotificationKind(str, Enum):
    """Reminder rule that produced a notification."""

    SERVICE_REMINDER = "service_reminder"
    PAYMENT_DUE = "payment_due"
    QUOTE_PENDING = "quote_pending"


@dataclass(frozen=True)
class NotificationDraft:
    """Everything the engine is allowed to write for a new notification.

    Identifiers, timestamps and the ``read`` flag are owned by the store and by
    the consuming clients, so they are not part of the draft.
    """

    audience: NotificationAudience
    kind: NotificationKind
    subject_key: str
    title: str
    body: str


@dataclass
class Notification:
    """Persisted message shown to every member of ``audience``."""

    id: int | str | None
    audience: NotificationAudience
    kind: NotificationKind
    subject_key: str
    title: str
    body: str
    created_at: datetime | None = None
    read: bool = False


__all__ = [
    "Notification",
    "NotificationAudience",
    "NotificationDraft",
    "NotificationKind",
]
