"""ORM models used by the application infrastructure."""

from .client import ClientModel
from .job import JobModel
from .notification import NotificationModel
from .quotation import QuotationModel

__all__ = [
    "ClientModel",
    "JobModel",
    "NotificationModel",
    "QuotationModel",
]
