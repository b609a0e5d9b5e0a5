"""Domain entities exposed by the application."""

from .client import (
    CLIENT_TYPE_AIRBNB,
    CLIENT_TYPE_REGULAR,
    CLIENT_TYPE_SPORADIC,
    Client,
)
from .job import (
    JOB_STATUS_COMPLETED,
    JOB_STATUS_IN_PROGRESS,
    JOB_STATUS_ON_THE_WAY,
    JOB_STATUS_SCHEDULED,
    JOB_STATUSES,
    Job,
)
from .notification import (
    Notification,
    NotificationAudience,
    NotificationDraft,
    NotificationKind,
)
from .quotation import Quotation
from .reminder import ReminderCandidate, ScanSnapshot

__all__ = [
    "Client",
    "CLIENT_TYPE_REGULAR",
    "CLIENT_TYPE_AIRBNB",
    "CLIENT_TYPE_SPORADIC",
    "Job",
    "JOB_STATUSES",
    "JOB_STATUS_SCHEDULED",
    "JOB_STATUS_ON_THE_WAY",
    "JOB_STATUS_IN_PROGRESS",
    "JOB_STATUS_COMPLETED",
    "Notification",
    "NotificationAudience",
    "NotificationDraft",
    "NotificationKind",
    "Quotation",
    "ReminderCandidate",
    "ScanSnapshot",
]
