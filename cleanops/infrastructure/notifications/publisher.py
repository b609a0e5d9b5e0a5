"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

from typing import Any

from cleanops.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager


class NotificationPublisher:
    """Serialize notifications and send them to their audience channel."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    async def publish(self, notification: Notification) -> int:
        """Push ``notification`` to the connections of its audience."""

        message = {"type": "notification", "data": self._serialize(notification)}
        return await self._manager.send_to_audience(notification.audience, message)

    @staticmethod
    def _serialize(notification: Notification) -> dict[str, Any]:
        return {
            "id": notification.id,
            "audience": notification.audience.value,
            "kind": notification.kind.value,
            "subject_key": notification.subject_key,
            "title": notification.title,
            "body": notification.body,
            "created_at": notification.created_at.isoformat()
            if notification.created_at
            else None,
            "read": notification.read,
        }


notification_publisher = NotificationPublisher(notification_manager)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return NotificationPublisher._serialize(notification)


__all__ = [
    "NotificationPublisher",
    "notification_publisher",
    "serialize_notification",
]
