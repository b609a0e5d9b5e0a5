from fastapi import APIRouter, Depends

from cleanops.application.reminders import ReminderScheduler
from cleanops.infrastructure.stores import NotificationStore
from cleanops.interfaces.api.dependencies import get_scheduler, get_store
from cleanops.interfaces.api.schemas import HealthRead

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthRead)
def health(
    store: NotificationStore = Depends(get_store),
    scheduler: ReminderScheduler = Depends(get_scheduler),
) -> HealthRead:
    """Report the active backend and the scanner state."""

    return HealthRead(status="ok", database=store.name, scanner=scheduler.state.value)
