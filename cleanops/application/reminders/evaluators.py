"""Reminder rules.

Each evaluator is a pure function of a :class:`ScanSnapshot` and the current
calendar day. They only describe who should be told what; whether it was
already said today is decided later by the deduplication gate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date, timedelta
from functools import partial

from cleanops.domain.entities import (
    JOB_STATUS_COMPLETED,
    JOB_STATUS_SCHEDULED,
    NotificationAudience,
    NotificationKind,
    ReminderCandidate,
    ScanSnapshot,
)
from cleanops.utils import local_date

logger = logging.getLogger(__name__)

QUOTE_PENDING_DAYS = 2

Evaluator = Callable[[ScanSnapshot, date], list[ReminderCandidate]]


def _clean(value: str | None) -> str:
    return (value or "").strip()


def evaluate_service_reminders(snapshot: ScanSnapshot, today: date) -> list[ReminderCandidate]:
    """Tell the staff about every cleaning booked for today."""

    candidates: list[ReminderCandidate] = []
    for job in snapshot.scheduled_jobs:
        if job.date != today or job.status != JOB_STATUS_SCHEDULED:
            continue
        client_name = _clean(job.client_name)
        if not client_name:
            logger.debug("Skipping job %s without client for service reminder", job.id)
            continue
        address = _clean(job.client_address) or "address not provided"
        candidates.append(
            ReminderCandidate(
                kind=NotificationKind.SERVICE_REMINDER,
                audience=NotificationAudience.STAFF,
                subject_key=client_name,
                title="Cleaning today",
                body=f"{client_name} at {address}",
            )
        )
    return candidates


def evaluate_payment_due(snapshot: ScanSnapshot, today: date) -> list[ReminderCandidate]:
    """Tell the admins about completed cleanings that were never paid."""

    candidates: list[ReminderCandidate] = []
    for job in snapshot.unpaid_jobs:
        if job.status != JOB_STATUS_COMPLETED or job.is_paid:
            continue
        client_name = _clean(job.client_name)
        if not client_name:
            logger.debug("Skipping job %s without client for payment reminder", job.id)
            continue
        candidates.append(
            ReminderCandidate(
                kind=NotificationKind.PAYMENT_DUE,
                audience=NotificationAudience.ADMIN,
                subject_key=client_name,
                title="Payment pending",
                body=(
                    f"The cleaning for {client_name} on {job.date.isoformat()} "
                    "was completed and its payment is still pending."
                ),
            )
        )
    return candidates


def evaluate_quote_pending(
    snapshot: ScanSnapshot,
    today: date,
    *,
    pending_days: int = QUOTE_PENDING_DAYS,
) -> list[ReminderCandidate]:
    """Tell the admins about quotations that are ``pending_days`` old or older."""

    threshold = today - timedelta(days=pending_days)
    candidates: list[ReminderCandidate] = []
    for quotation in snapshot.stale_quotations:
        created_on = local_date(quotation.created_at)
        if created_on > threshold:
            continue
        client_name = _clean(quotation.client_name)
        if not client_name:
            logger.debug("Skipping quotation %s without client name", quotation.id)
            continue
        age = (today - created_on).days
        day_word = "day" if age == 1 else "days"
        candidates.append(
            ReminderCandidate(
                kind=NotificationKind.QUOTE_PENDING,
                audience=NotificationAudience.ADMIN,
                subject_key=client_name,
                title="Quotation awaiting follow-up",
                body=(
                    f"The quotation for {client_name} was sent {age} {day_word} ago "
                    "without an answer. Follow up with the client."
                ),
            )
        )
    return candidates


DEFAULT_EVALUATORS: tuple[Evaluator, ...] = (
    evaluate_service_reminders,
    evaluate_payment_due,
    evaluate_quote_pending,
)


def build_evaluators(*, quote_pending_days: int = QUOTE_PENDING_DAYS) -> tuple[Evaluator, ...]:
    """Return the evaluators in their fixed order with the configured thresholds."""

    if quote_pending_days == QUOTE_PENDING_DAYS:
        return DEFAULT_EVALUATORS
    return (
        evaluate_service_reminders,
        evaluate_payment_due,
        partial(evaluate_quote_pending, pending_days=quote_pending_days),
    )


def collect_candidates(
    snapshot: ScanSnapshot,
    today: date,
    evaluators: Sequence[Evaluator] = DEFAULT_EVALUATORS,
) -> list[ReminderCandidate]:
    """Run ``evaluators`` in order and concatenate their candidates.

    A failing evaluator is logged and skipped so one bad rule cannot silence
    the others.
    """

    candidates: list[ReminderCandidate] = []
    for evaluator in evaluators:
        try:
            candidates.extend(evaluator(snapshot, today))
        except Exception:
            logger.exception("Reminder evaluator %r failed", evaluator)
    return candidates


__all__ = [
    "DEFAULT_EVALUATORS",
    "Evaluator",
    "QUOTE_PENDING_DAYS",
    "build_evaluators",
    "collect_candidates",
    "evaluate_payment_due",
    "evaluate_quote_pending",
    "evaluate_service_reminders",
]
