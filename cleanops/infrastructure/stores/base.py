"""Capabilities every storage backend exposes to the rest of the system.

The reminder engine only depends on :class:`ReminderStore`; it can read the
snapshot, run the dedup query and append drafts, but it has no way to touch the
``read`` flag. The narrower :class:`NotificationInbox` is what the client pull
API uses to list notifications and acknowledge them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime

from cleanops.domain.entities import (
    Notification,
    NotificationAudience,
    NotificationDraft,
    NotificationKind,
    ScanSnapshot,
)

from .errors import NotificationNotFoundError

NotificationCallback = Callable[[Sequence[Notification]], None]
Unsubscribe = Callable[[], None]


class ReminderStore(ABC):
    """Read side and append-only write side used by the reminder scan."""

    name: str = "unknown"
    supports_subscriptions: bool = False

    @abstractmethod
    def read_snapshot(self, today: date, quote_cutoff: datetime) -> ScanSnapshot:
        """Return the records the scan for ``today`` reasons over.

        ``quote_cutoff`` is exclusive: quotations created before it are stale.
        """

    @abstractmethod
    def find_existing(
        self,
        *,
        kind: NotificationKind,
        audience: NotificationAudience,
        subject_key: str,
        since: datetime,
    ) -> Notification | None:
        """Return a notification with the same dedup key created at or after ``since``."""

    @abstractmethod
    def append(self, draft: NotificationDraft) -> Notification:
        """Persist ``draft`` and return it with the store-assigned id and timestamp."""

    def subscribe(
        self, audience: NotificationAudience, callback: NotificationCallback
    ) -> Unsubscribe:
        """Invoke ``callback`` with notifications added for ``audience``.

        Backends without live change feeds raise :class:`NotImplementedError`;
        consumers are expected to poll :meth:`NotificationInbox.list_for_audience`
        instead.
        """

        raise NotImplementedError(f"The {self.name} store has no live subscriptions")


class NotificationInbox(ABC):
    """Client-facing operations over the persisted notification log."""

    @abstractmethod
    def list_for_audience(
        self,
        audience: NotificationAudience,
        *,
        limit: int | None = 20,
        unread_only: bool = False,
    ) -> Sequence[Notification]:
        """Return notifications for ``audience``, most recent first."""

    @abstractmethod
    def count_unread(self, audience: NotificationAudience) -> int:
        """Return how many notifications for ``audience`` are still unread."""

    @abstractmethod
    def mark_as_read(self, notification_ids: Iterable[int | str]) -> int:
        """Flag the given notifications as read, ignoring unknown ids."""

    def mark_one_as_read(self, notification_id: int | str) -> None:
        """Flag a single notification as read or raise if it does not exist."""

        if not self.mark_as_read([notification_id]):
            raise NotificationNotFoundError(
                f"Notification with id {notification_id} not found"
            )


class NotificationStore(ReminderStore, NotificationInbox):
    """A backend that serves both the reminder engine and the inbox."""


__all__ = [
    "NotificationCallback",
    "NotificationInbox",
    "NotificationStore",
    "ReminderStore",
    "Unsubscribe",
]
