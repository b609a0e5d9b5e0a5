"""Domain entity representing a scheduled cleaning."""

from dataclasses import dataclass
from datetime import date, datetime

JOB_STATUS_SCHEDULED = "scheduled"
JOB_STATUS_ON_THE_WAY = "on_the_way"
JOB_STATUS_IN_PROGRESS = "in_progress"
JOB_STATUS_COMPLETED = "completed"

JOB_STATUSES = (
    JOB_STATUS_SCHEDULED,
    JOB_STATUS_ON_THE_WAY,
    JOB_STATUS_IN_PROGRESS,
    JOB_STATUS_COMPLETED,
)


@dataclass(frozen=True)
class Job:
    """A cleaning booked for a client, joined with the client's identity.

    ``client_name`` and ``client_address`` come from the client record (or the
    denormalized copy kept on the job document) and may be missing when the
    join could not be resolved.
    """

    id: int | str | None
    client_id: int | str | None
    client_name: str | None
    client_address: str | None
    date: date
    status: str
    service_value: float | None = None
    payment_date: date | None = None
    created_at: datetime | None = None

    @property
    def is_paid(self) -> bool:
        return self.payment_date is not None


__all__ = [
    "Job",
    "JOB_STATUSES",
    "JOB_STATUS_SCHEDULED",
    "JOB_STATUS_ON_THE_WAY",
    "JOB_STATUS_IN_PROGRESS",
    "JOB_STATUS_COMPLETED",
]
