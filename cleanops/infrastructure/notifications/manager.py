"""Connection management helpers for notification websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Set

from fastapi import WebSocket

from cleanops.domain.entities import NotificationAudience

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Manage active websocket connections grouped by audience."""

    def __init__(self) -> None:
        self._connections: DefaultDict[NotificationAudience, Set[WebSocket]] = defaultdict(set)

    async def connect(self, audience: NotificationAudience, websocket: WebSocket) -> None:
        """Accept the websocket connection and register it for ``audience``."""

        await websocket.accept()
        self._connections[audience].add(websocket)

    def disconnect(self, audience: NotificationAudience, websocket: WebSocket) -> None:
        """Remove ``websocket`` from the pool for ``audience``."""

        connections = self._connections.get(audience)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._connections.pop(audience, None)

    def connection_count(self, audience: NotificationAudience) -> int:
        return len(self._connections.get(audience, ()))

    async def send_to_audience(
        self, audience: NotificationAudience, message: dict[str, Any]
    ) -> int:
        """Send ``message`` to every active connection for ``audience``.

        Returns the number of connections that received it. Connections that
        fail are dropped; their clients catch up through the pull API.
        """

        delivered = 0
        connections = list(self._connections.get(audience, set()))
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception as exc:
                logger.info("Dropping %s websocket after send failure: %s", audience.value, exc)
                self.disconnect(audience, connection)
            else:
                delivered += 1
        return delivered


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
