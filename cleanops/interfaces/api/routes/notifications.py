"""Endpoints and websocket handler for audience notifications."""

from __future__ import annotations

import logging
from anyio import to_thread
from fastapi import APIRouter, Depends, HTTPException, Response, WebSocket, WebSocketDisconnect, status

from cleanops.application.use_cases import (
    count_unread_notifications,
    list_notifications as list_notifications_uc,
    mark_notification_read as mark_notification_read_uc,
    mark_notifications_read as mark_notifications_read_uc,
)
from cleanops.config import get_settings
from cleanops.domain.entities import Notification, NotificationAudience
from cleanops.infrastructure.notifications import notification_manager, serialize_notification
from cleanops.infrastructure.stores import (
    NotificationInbox,
    NotificationNotFoundError,
    StoreUnavailableError,
)
from cleanops.interfaces.api.dependencies import get_inbox
from cleanops.interfaces.api.schemas import (
    NotificationMarkReadRequest,
    NotificationRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

logger = logging.getLogger(__name__)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id,
        audience=notification.audience,
        kind=notification.kind,
        subject_key=notification.subject_key,
        title=notification.title,
        body=notification.body,
        created_at=notification.created_at,
        read=notification.read,
    )


def _store_unavailable(exc: StoreUnavailableError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    audience: NotificationAudience,
    limit: int | None = None,
    unread_only: bool = False,
    inbox: NotificationInbox = Depends(get_inbox),
) -> list[NotificationRead]:
    """Return the most recent notifications for ``audience``."""

    try:
        notifications = list_notifications_uc(
            inbox,
            audience,
            limit=limit or get_settings().notification_list_limit,
            unread_only=unread_only,
        )
    except StoreUnavailableError as exc:
        raise _store_unavailable(exc) from exc
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCountRead)
def unread_count(
    audience: NotificationAudience,
    inbox: NotificationInbox = Depends(get_inbox),
) -> UnreadCountRead:
    """Return how many notifications ``audience`` has not read yet."""

    try:
        unread = count_unread_notifications(inbox, audience)
    except StoreUnavailableError as exc:
        raise _store_unavailable(exc) from exc
    return UnreadCountRead(audience=audience, unread=unread)


@router.post("/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notifications_read(
    payload: NotificationMarkReadRequest,
    inbox: NotificationInbox = Depends(get_inbox),
) -> Response:
    """Mark a batch of notifications as read, ignoring unknown ids."""

    try:
        mark_notifications_read_uc(inbox, payload.unique_ids())
    except StoreUnavailableError as exc:
        raise _store_unavailable(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notification_read(
    notification_id: str,
    inbox: NotificationInbox = Depends(get_inbox),
) -> Response:
    """Mark the notification identified by ``notification_id`` as read."""

    try:
        mark_notification_read_uc(inbox, notification_id)
    except NotificationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StoreUnavailableError as exc:
        raise _store_unavailable(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to an audience."""

    try:
        audience = NotificationAudience(websocket.query_params.get("audience", ""))
    except ValueError:
        await websocket.close(code=1008)
        return

    inbox: NotificationInbox | None = getattr(websocket.app.state, "store", None)
    if inbox is None:
        await websocket.close(code=1011)
        return

    try:
        pending_notifications = await to_thread.run_sync(
            lambda: list_notifications_uc(
                inbox,
                audience,
                limit=get_settings().notification_list_limit,
                unread_only=True,
            )
        )
    except StoreUnavailableError:
        logger.warning("Could not load pending notifications for %s websocket", audience.value)
        pending_notifications = []

    await notification_manager.connect(audience, websocket)
    try:
        await websocket.send_json(
            {"type": "init", "data": [serialize_notification(n) for n in pending_notifications]}
        )
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                raw_ids = message.get("ids")
                ids = [
                    notification_id
                    for notification_id in (raw_ids if isinstance(raw_ids, list) else [])
                    if isinstance(notification_id, (int, str)) and not isinstance(notification_id, bool)
                ]
                if ids:
                    try:
                        await to_thread.run_sync(mark_notifications_read_uc, inbox, ids)
                    except StoreUnavailableError:
                        logger.warning("Could not acknowledge notifications %s", ids)
                continue
    except WebSocketDisconnect:
        notification_manager.disconnect(audience, websocket)
    except Exception:
        notification_manager.disconnect(audience, websocket)
        raise
