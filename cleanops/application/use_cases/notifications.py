"""Use cases behind the notification pull API."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from cleanops.domain.entities import Notification, NotificationAudience
from cleanops.infrastructure.stores import NotificationInbox

MAX_LIST_LIMIT = 100


def list_notifications(
    inbox: NotificationInbox,
    audience: NotificationAudience,
    *,
    limit: int = 20,
    unread_only: bool = False,
) -> Sequence[Notification]:
    """Return the most recent notifications for ``audience``."""

    bounded = max(1, min(limit, MAX_LIST_LIMIT))
    return inbox.list_for_audience(audience, limit=bounded, unread_only=unread_only)


def count_unread_notifications(inbox: NotificationInbox, audience: NotificationAudience) -> int:
    """Return how many notifications ``audience`` has not acknowledged yet."""

    return inbox.count_unread(audience)


def mark_notifications_read(inbox: NotificationInbox, notification_ids: Iterable[int | str]) -> int:
    """Mark a batch of notifications as read and return how many were updated."""

    unique = list(dict.fromkeys(notification_ids))
    if not unique:
        return 0
    return inbox.mark_as_read(unique)


def mark_notification_read(inbox: NotificationInbox, notification_id: int | str) -> None:
    """Mark one notification as read.

    Raises :class:`~cleanops.infrastructure.stores.NotificationNotFoundError`
    when ``notification_id`` does not exist.
    """

    inbox.mark_one_as_read(notification_id)


__all__ = [
    "MAX_LIST_LIMIT",
    "count_unread_notifications",
    "list_notifications",
    "mark_notification_read",
    "mark_notifications_read",
]
