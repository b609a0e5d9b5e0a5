"""Ephemeral values exchanged during a single reminder scan."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .job import Job
from .notification import NotificationAudience, NotificationDraft, NotificationKind
from .quotation import Quotation


@dataclass(frozen=True)
class ReminderCandidate:
    """Notification proposal emitted by an evaluator, not persisted yet."""

    kind: NotificationKind
    audience: NotificationAudience
    subject_key: str
    title: str
    body: str

    def to_draft(self) -> NotificationDraft:
        return NotificationDraft(
            audience=self.audience,
            kind=self.kind,
            subject_key=self.subject_key,
            title=self.title,
            body=self.body,
        )


@dataclass(frozen=True)
class ScanSnapshot:
    """Read-only view of the business records a scan reasons over.

    The collections are tuples so the snapshot cannot change while a scan is
    running; the next scan reads a fresh one.
    """

    today: date
    scheduled_jobs: tuple[Job, ...] = field(default_factory=tuple)
    unpaid_jobs: tuple[Job, ...] = field(default_factory=tuple)
    stale_quotations: tuple[Quotation, ...] = field(default_factory=tuple)


__all__ = ["ReminderCandidate", "ScanSnapshot"]
