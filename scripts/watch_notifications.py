"""Print notifications for an audience as they arrive.

Uses the live subscription when the backend has one and falls back to polling
the stored log otherwise.
"""

from __future__ import annotations

import argparse
import sys
import threading
import time
from collections.abc import Sequence
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cleanops.domain.entities import Notification, NotificationAudience
from cleanops.infrastructure.stores import (
    NotificationStore,
    StoreConfigurationError,
    StoreUnavailableError,
    build_store,
)
from cleanops.utils import configure_logging


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tail notifications for an audience.")
    parser.add_argument(
        "audience",
        choices=[audience.value for audience in NotificationAudience],
        help="Audience to watch",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=15.0,
        help="Polling interval in seconds when live subscriptions are unavailable",
    )
    parser.add_argument("--limit", type=int, default=20, help="Notifications fetched per poll")
    return parser.parse_args()


def _print(notification: Notification) -> None:
    created = notification.created_at.isoformat() if notification.created_at else "-"
    print(f"[{created}] {notification.kind.value}: {notification.title} - {notification.body}")


def watch_live(store: NotificationStore, audience: NotificationAudience) -> None:
    stop = threading.Event()

    def _on_added(notifications) -> None:
        for notification in notifications:
            _print(notification)

    unsubscribe = store.subscribe(audience, _on_added)
    try:
        stop.wait()
    except KeyboardInterrupt:
        pass
    finally:
        unsubscribe()


def unseen_notifications(
    page: Sequence[Notification], previous_ids: set[int | str]
) -> tuple[list[Notification], set[int | str]]:
    """Return the notifications of ``page`` not shown yet, oldest first, and the ids to remember.

    Only the ids of the latest page are kept, so a long running tail holds at
    most ``limit`` ids.
    """

    fresh = [n for n in reversed(page) if n.id not in previous_ids]
    return fresh, {n.id for n in page}


def watch_polling(
    store: NotificationStore, audience: NotificationAudience, *, interval: float, limit: int
) -> None:
    seen: set[int | str] = set()
    try:
        while True:
            try:
                page = store.list_for_audience(audience, limit=limit)
            except StoreUnavailableError as exc:
                print(f"Store unavailable, retrying: {exc}", file=sys.stderr)
            else:
                fresh, seen = unseen_notifications(page, seen)
                for notification in fresh:
                    _print(notification)
            time.sleep(interval)
    except KeyboardInterrupt:
        pass


def main() -> None:
    args = parse_args()
    configure_logging()
    try:
        store = build_store()
    except StoreConfigurationError as exc:
        raise SystemExit(f"Could not open the store: {exc}") from exc

    audience = NotificationAudience(args.audience)
    if store.supports_subscriptions:
        watch_live(store, audience)
    else:
        watch_polling(store, audience, interval=args.interval, limit=args.limit)


if __name__ == "__main__":
    main()
