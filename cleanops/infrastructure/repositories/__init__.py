"""Repository implementations for infrastructure layer."""

from .client_repository import ClientRepository
from .job_repository import JobRepository
from .notification_repository import NotificationRepository
from .quotation_repository import QuotationRepository

__all__ = [
    "ClientRepository",
    "JobRepository",
    "NotificationRepository",
    "QuotationRepository",
]
