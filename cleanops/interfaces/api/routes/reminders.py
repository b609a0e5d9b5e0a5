"""Manual trigger for the reminder scan."""

from fastapi import APIRouter, Depends, HTTPException, status

from cleanops.application.reminders import ReminderScheduler
from cleanops.interfaces.api.dependencies import get_scheduler
from cleanops.interfaces.api.schemas import ScanReportRead

router = APIRouter(prefix="/reminders", tags=["reminders"])


@router.post("/scan", response_model=ScanReportRead)
async def scan_now(scheduler: ReminderScheduler = Depends(get_scheduler)) -> ScanReportRead:
    """Run a reminder scan immediately and return its outcome."""

    report = await scheduler.tick()
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A reminder scan is already running",
        )
    return ScanReportRead.model_validate(report.as_dict())


@router.get("/last-scan", response_model=ScanReportRead | None)
def last_scan(scheduler: ReminderScheduler = Depends(get_scheduler)) -> ScanReportRead | None:
    """Return the outcome of the most recent scan, if any ran yet."""

    report = scheduler.last_report
    if report is None:
        return None
    return ScanReportRead.model_validate(report.as_dict())


__all__ = ["router"]
