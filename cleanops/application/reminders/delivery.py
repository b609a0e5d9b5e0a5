"""Persist accepted reminders and push them to live audiences."""

from __future__ import annotations

import logging

from anyio import to_thread

from cleanops.domain.entities import (
    Notification,
    NotificationAudience,
    NotificationDraft,
    NotificationKind,
)
from cleanops.infrastructure.notifications import NotificationPublisher
from cleanops.infrastructure.stores import ReminderStore

logger = logging.getLogger(__name__)


class NotificationDelivery:
    """Write a notification to the store, then publish the stored copy.

    The stored row is the source of truth. If the append fails nothing is
    pushed and :class:`~cleanops.infrastructure.stores.StoreUnavailableError`
    propagates. If the push fails the notification stays available through the
    pull API and the failure is only logged.
    """

    def __init__(self, store: ReminderStore, publisher: NotificationPublisher | None) -> None:
        self._store = store
        self._publisher = publisher

    async def deliver(
        self,
        audience: NotificationAudience,
        title: str,
        body: str,
        kind: NotificationKind,
        subject_key: str,
    ) -> Notification:
        draft = NotificationDraft(
            audience=audience,
            kind=kind,
            subject_key=subject_key,
            title=title,
            body=body,
        )
        saved = await to_thread.run_sync(self._store.append, draft)
        logger.info(
            "Stored %s notification %s for %s (%s)",
            kind.value,
            saved.id,
            audience.value,
            subject_key,
        )
        await self._push(saved)
        return saved

    async def _push(self, notification: Notification) -> None:
        if self._publisher is None:
            return
        try:
            delivered = await self._publisher.publish(notification)
        except Exception:
            logger.warning(
                "Push of notification %s to %s failed; clients will pull it",
                notification.id,
                notification.audience.value,
                exc_info=True,
            )
            return
        logger.debug(
            "Pushed notification %s to %d %s connection(s)",
            notification.id,
            delivered,
            notification.audience.value,
        )


__all__ = ["NotificationDelivery"]
