"""Reminder engine: evaluators, dedup gate, delivery and the scan scheduler."""

from .dedup import DeduplicationGate
from .delivery import NotificationDelivery
from .evaluators import (
    DEFAULT_EVALUATORS,
    QUOTE_PENDING_DAYS,
    Evaluator,
    build_evaluators,
    collect_candidates,
    evaluate_payment_due,
    evaluate_quote_pending,
    evaluate_service_reminders,
)
from .scheduler import ReminderScheduler, ScanReport, ScanState
from .factory import build_reminder_scheduler

__all__ = [
    "DEFAULT_EVALUATORS",
    "DeduplicationGate",
    "Evaluator",
    "NotificationDelivery",
    "QUOTE_PENDING_DAYS",
    "ReminderScheduler",
    "ScanReport",
    "ScanState",
    "build_evaluators",
    "build_reminder_scheduler",
    "collect_candidates",
    "evaluate_payment_due",
    "evaluate_quote_pending",
    "evaluate_service_reminders",
]
