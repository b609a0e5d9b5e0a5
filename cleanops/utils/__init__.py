"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    local_date,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    start_of_day,
)
from .logging import configure_logging

__all__ = [
    "configure_logging",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "local_date",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "start_of_day",
]
