"""Wire the reminder engine from the application settings."""

from __future__ import annotations

from cleanops.config import Settings, get_settings
from cleanops.infrastructure.notifications import NotificationPublisher, notification_publisher
from cleanops.infrastructure.stores import ReminderStore

from .delivery import NotificationDelivery
from .scheduler import ReminderScheduler


def build_reminder_scheduler(
    store: ReminderStore,
    *,
    settings: Settings | None = None,
    publisher: NotificationPublisher | None = notification_publisher,
) -> ReminderScheduler:
    """Return a scheduler for ``store`` configured from ``settings``.

    Scripts that run outside the API process pass ``publisher=None``; there are
    no websocket connections to push to and clients pull the stored rows.
    """

    settings = settings or get_settings()
    return ReminderScheduler(
        store,
        NotificationDelivery(store, publisher),
        interval_seconds=settings.reminder_interval_seconds,
        tick_timeout_seconds=settings.reminder_tick_timeout_seconds,
        quote_pending_days=settings.quote_pending_days,
        run_on_startup=settings.reminder_run_on_startup,
    )


__all__ = ["build_reminder_scheduler"]
