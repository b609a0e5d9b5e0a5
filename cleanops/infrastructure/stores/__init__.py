"""Storage backends shared by the reminder engine and the inbox API."""

from .base import (
    NotificationCallback,
    NotificationInbox,
    NotificationStore,
    ReminderStore,
    Unsubscribe,
)
from .errors import (
    NotificationNotFoundError,
    StoreConfigurationError,
    StoreError,
    StoreUnavailableError,
)
from .factory import build_store
from .firestore_store import FirestoreNotificationStore
from .sql_store import SqlNotificationStore

__all__ = [
    "FirestoreNotificationStore",
    "NotificationCallback",
    "NotificationInbox",
    "NotificationNotFoundError",
    "NotificationStore",
    "ReminderStore",
    "SqlNotificationStore",
    "StoreConfigurationError",
    "StoreError",
    "StoreUnavailableError",
    "Unsubscribe",
    "build_store",
]
