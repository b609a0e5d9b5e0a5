from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cleanops.application.reminders import build_reminder_scheduler
from cleanops.config import get_settings
from cleanops.infrastructure.stores import NotificationStore, build_store
from cleanops.interfaces.api.routes import register_routes
from cleanops.utils import configure_logging


def create_app(
    *,
    store: NotificationStore | None = None,
    start_scheduler: bool | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``store`` overrides the backend selected from the settings and
    ``start_scheduler`` overrides ``REMINDER_SCHEDULER_ENABLED``; both exist so
    tests can run the API against an in-memory database without a timer.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Select the storage backend, start the reminder timer and stop it on exit."""

        settings = get_settings()
        configure_logging(settings.log_level)

        active_store = store or build_store(settings)
        scheduler = build_reminder_scheduler(active_store, settings=settings)
        app.state.store = active_store
        app.state.reminder_scheduler = scheduler

        enabled = settings.reminder_scheduler_enabled if start_scheduler is None else start_scheduler
        if enabled:
            scheduler.start()
        try:
            yield
        finally:
            await scheduler.shutdown()
            if store is None and active_store.name == "sql":
                from cleanops.infrastructure.database import engine

                engine.dispose()

    app = FastAPI(title="Cleanops", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
