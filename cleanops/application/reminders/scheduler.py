"""Timer driven reminder scan.

``ReminderScheduler`` owns the interval timer and a two-state guard. A tick
that fires while the previous one is still scanning does nothing, so two scans
never race on the dedup query. Shutdown pauses the timer and lets an in-flight
scan finish before the timer is torn down, so a notification is never left
stored but unpublished because the process was stopping.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any

import anyio
from anyio import to_thread
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from cleanops.domain.entities import ScanSnapshot
from cleanops.infrastructure.stores import ReminderStore, StoreUnavailableError
from cleanops.utils import get_app_timezone, local_date, now_in_app_timezone, start_of_day

from .dedup import DeduplicationGate
from .delivery import NotificationDelivery
from .evaluators import QUOTE_PENDING_DAYS, Evaluator, build_evaluators, collect_candidates

logger = logging.getLogger(__name__)

_DRAIN_POLL_SECONDS = 0.05


class ScanState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"


@dataclass
class ScanReport:
    """Outcome of one tick."""

    started_at: datetime
    day: date
    candidates: int = 0
    admitted: int = 0
    suppressed: int = 0
    failed: int = 0
    delivered_ids: list[int | str] = field(default_factory=list)
    snapshot_failed: bool = False
    timed_out: bool = False
    finished_at: datetime | None = None

    def as_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["started_at"] = self.started_at.isoformat()
        payload["day"] = self.day.isoformat()
        payload["finished_at"] = self.finished_at.isoformat() if self.finished_at else None
        return payload


class ReminderScheduler:
    """Run the reminder scan on a fixed interval, one scan at a time."""

    JOB_ID = "reminder-scan"

    def __init__(
        self,
        store: ReminderStore,
        delivery: NotificationDelivery,
        *,
        evaluators: Sequence[Evaluator] | None = None,
        gate: DeduplicationGate | None = None,
        clock: Callable[[], datetime] = now_in_app_timezone,
        interval_seconds: float = 60,
        tick_timeout_seconds: float | None = None,
        quote_pending_days: int = QUOTE_PENDING_DAYS,
        run_on_startup: bool = True,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")
        self._store = store
        self._delivery = delivery
        self._evaluators = tuple(
            evaluators
            if evaluators is not None
            else build_evaluators(quote_pending_days=quote_pending_days)
        )
        self._gate = gate or DeduplicationGate(store)
        self._clock = clock
        self._interval_seconds = interval_seconds
        self._tick_timeout_seconds = tick_timeout_seconds
        self._quote_pending_days = quote_pending_days
        self._run_on_startup = run_on_startup
        self._state = ScanState.IDLE
        self._timer: AsyncIOScheduler | None = None
        self._last_report: ScanReport | None = None

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def running(self) -> bool:
        return self._timer is not None

    @property
    def last_report(self) -> ScanReport | None:
        return self._last_report

    def start(self) -> None:
        """Register the interval job on the running event loop."""

        if self._timer is not None:
            logger.info("Reminder scheduler already running, skipping initialization")
            return

        timer = AsyncIOScheduler(timezone=get_app_timezone())
        job_options: dict[str, Any] = {}
        if self._run_on_startup:
            job_options["next_run_time"] = datetime.now(tz=get_app_timezone())
        timer.add_job(
            self.tick,
            trigger="interval",
            seconds=self._interval_seconds,
            id=self.JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            **job_options,
        )
        timer.start()
        self._timer = timer
        logger.info(
            "Reminder scheduler started: scanning every %s seconds", self._interval_seconds
        )

    async def shutdown(self, *, drain_timeout: float = 30.0) -> None:
        """Stop the timer, waiting for an in-flight scan to finish first."""

        timer = self._timer
        if timer is not None:
            timer.pause()

        with anyio.move_on_after(drain_timeout) as scope:
            while self._state is ScanState.SCANNING:
                await anyio.sleep(_DRAIN_POLL_SECONDS)
        if scope.cancelled_caught:
            logger.warning(
                "Reminder scan still running after %s seconds, stopping anyway",
                drain_timeout,
            )

        if timer is not None:
            timer.shutdown(wait=False)
            self._timer = None
            logger.info("Reminder scheduler stopped")

    async def tick(self) -> ScanReport | None:
        """Run one scan unless another one is in flight.

        Returns ``None`` when the tick was skipped. Errors never escape: the
        timer must keep firing for the lifetime of the process.
        """

        if self._state is ScanState.SCANNING:
            logger.info("Previous reminder scan still running, skipping this tick")
            return None

        self._state = ScanState.SCANNING
        now = self._clock()
        report = ScanReport(started_at=now, day=local_date(now))
        try:
            if self._tick_timeout_seconds is None:
                await self._scan(report)
            else:
                with anyio.move_on_after(self._tick_timeout_seconds) as scope:
                    await self._scan(report)
                if scope.cancelled_caught:
                    report.timed_out = True
                    logger.warning(
                        "Reminder scan exceeded %s seconds and was abandoned",
                        self._tick_timeout_seconds,
                    )
        except Exception:
            logger.exception("Reminder scan aborted by an unexpected error")
        finally:
            report.finished_at = self._clock()
            self._last_report = report
            self._state = ScanState.IDLE

        logger.info(
            "Reminder scan for %s: %d candidate(s), %d sent, %d duplicate(s), %d failed",
            report.day.isoformat(),
            report.candidates,
            report.admitted,
            report.suppressed,
            report.failed,
        )
        return report

    async def _read_snapshot(self, today: date) -> ScanSnapshot:
        quote_cutoff = start_of_day(today - timedelta(days=self._quote_pending_days - 1))
        return await to_thread.run_sync(self._store.read_snapshot, today, quote_cutoff)

    async def _scan(self, report: ScanReport) -> None:
        today = report.day
        day_start = start_of_day(today)

        try:
            snapshot = await self._read_snapshot(today)
        except StoreUnavailableError:
            report.snapshot_failed = True
            logger.warning(
                "Could not read business records, retrying on the next scan",
                exc_info=True,
            )
            return

        candidates = collect_candidates(snapshot, today, self._evaluators)
        report.candidates = len(candidates)

        for candidate in candidates:
            try:
                admitted = await self._gate.admit(candidate, day_start)
            except StoreUnavailableError:
                report.failed += 1
                logger.warning(
                    "Dedup check failed for %s/%s, retrying on the next scan",
                    candidate.kind.value,
                    candidate.subject_key,
                )
                continue

            if not admitted:
                report.suppressed += 1
                continue

            # Once admitted, store and push complete together; the tick deadline
            # only takes effect between candidates.
            with anyio.CancelScope(shield=True):
                try:
                    saved = await self._delivery.deliver(
                        candidate.audience,
                        candidate.title,
                        candidate.body,
                        candidate.kind,
                        candidate.subject_key,
                    )
                except StoreUnavailableError:
                    report.failed += 1
                    logger.warning(
                        "Could not store %s/%s, retrying on the next scan",
                        candidate.kind.value,
                        candidate.subject_key,
                    )
                    continue

                report.admitted += 1
                report.delivered_ids.append(saved.id)


__all__ = ["ReminderScheduler", "ScanReport", "ScanState"]
