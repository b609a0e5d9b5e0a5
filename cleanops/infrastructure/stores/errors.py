"""Errors raised by the notification and entity stores."""


class StoreError(RuntimeError):
    """Base class for failures reported by a store backend."""


class StoreUnavailableError(StoreError):
    """Raised when the backend could not serve a read or a write right now.

    These failures are treated as transient: the reminder scan abandons the
    affected step and the condition is picked up again on the next scan.
    """


class StoreConfigurationError(StoreError):
    """Raised when the selected backend cannot be built from the settings."""


class NotificationNotFoundError(LookupError):
    """Raised when an inbox operation targets an unknown notification."""


__all__ = [
    "NotificationNotFoundError",
    "StoreConfigurationError",
    "StoreError",
    "StoreUnavailableError",
]
