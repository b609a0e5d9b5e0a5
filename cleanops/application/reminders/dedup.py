"""Once-per-day suppression of reminder candidates."""

from __future__ import annotations

import logging
from datetime import datetime

from anyio import to_thread

from cleanops.domain.entities import ReminderCandidate
from cleanops.infrastructure.stores import ReminderStore

logger = logging.getLogger(__name__)


class DeduplicationGate:
    """Admit a candidate only if nothing equivalent was stored since ``day_start``.

    Equivalence is the exact ``(kind, audience, subject_key)`` triple. The state
    lives in the store, so a freshly started process takes the same decisions
    as one that has been running all day.

    Store failures are not caught here: a candidate whose dedup query failed is
    never admitted, the caller skips it and the next scan tries again.
    """

    def __init__(self, store: ReminderStore) -> None:
        self._store = store

    def _lookup(self, candidate: ReminderCandidate, day_start: datetime):
        return self._store.find_existing(
            kind=candidate.kind,
            audience=candidate.audience,
            subject_key=candidate.subject_key,
            since=day_start,
        )

    async def admit(self, candidate: ReminderCandidate, day_start: datetime) -> bool:
        existing = await to_thread.run_sync(self._lookup, candidate, day_start)
        if existing is not None:
            logger.debug(
                "Suppressing %s for %s (%s): already sent as %s",
                candidate.kind.value,
                candidate.subject_key,
                candidate.audience.value,
                existing.id,
            )
            return False
        return True


__all__ = ["DeduplicationGate"]
