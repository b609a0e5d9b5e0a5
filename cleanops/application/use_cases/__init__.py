"""Application use cases."""

from .notifications import (
    MAX_LIST_LIMIT,
    count_unread_notifications,
    list_notifications,
    mark_notification_read,
    mark_notifications_read,
)

__all__ = [
    "MAX_LIST_LIMIT",
    "count_unread_notifications",
    "list_notifications",
    "mark_notification_read",
    "mark_notifications_read",
]
