"""Pydantic schemas for request and response bodies."""

from .notification import NotificationMarkReadRequest, NotificationRead, UnreadCountRead
from .reminder import HealthRead, ScanReportRead

__all__ = [
    "HealthRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "ScanReportRead",
    "UnreadCountRead",
]
