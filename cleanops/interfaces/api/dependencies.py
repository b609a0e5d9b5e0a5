"""FastAPI dependency utilities."""

from fastapi import HTTPException, Request, status

from cleanops.application.reminders import ReminderScheduler
from cleanops.infrastructure.stores import NotificationInbox, NotificationStore


def get_store(request: Request) -> NotificationStore:
    """Return the storage backend selected when the application started."""

    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage backend not initialized",
        )
    return store


def get_inbox(request: Request) -> NotificationInbox:
    """Return the client-facing view of the storage backend."""

    return get_store(request)


def get_scheduler(request: Request) -> ReminderScheduler:
    """Return the reminder scheduler owned by the application."""

    scheduler = getattr(request.app.state, "reminder_scheduler", None)
    if scheduler is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Reminder scheduler not initialized",
        )
    return scheduler
