"""Select the storage backend once, when the process starts."""

from __future__ import annotations

import logging

from google.auth.exceptions import GoogleAuthError

from cleanops.config import Settings, get_settings

from .base import NotificationStore
from .errors import StoreConfigurationError
from .firestore_store import FirestoreNotificationStore, build_firestore_client
from .sql_store import SqlNotificationStore

logger = logging.getLogger(__name__)


def build_store(settings: Settings | None = None) -> NotificationStore:
    """Return the document store when Firestore is configured, else the SQL store."""

    settings = settings or get_settings()
    if settings.uses_document_store:
        try:
            client = build_firestore_client(
                project_id=settings.firestore_project_id,
                credentials_file=settings.firestore_credentials_file,
                database=settings.firestore_database,
            )
        except (GoogleAuthError, OSError, ValueError) as exc:
            raise StoreConfigurationError(
                f"Could not create the Firestore client: {exc}"
            ) from exc
        logger.info(
            "Using Firestore store for project %s", settings.firestore_project_id
        )
        return FirestoreNotificationStore(
            client, subscription_limit=settings.notification_list_limit
        )

    from cleanops.infrastructure.database import (
        SessionLocal,
        engine,
        initialize_database,
    )

    initialize_database()
    logger.info("Using SQL store at %s", engine.url.render_as_string())
    return SqlNotificationStore(SessionLocal)


__all__ = ["build_store"]
