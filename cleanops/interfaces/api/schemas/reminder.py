"""Pydantic models for the reminder scan endpoints."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field


class ScanReportRead(BaseModel):
    """Outcome of a reminder scan."""

    started_at: datetime
    finished_at: datetime | None = None
    day: date
    candidates: int
    admitted: int
    suppressed: int
    failed: int
    delivered_ids: list[int | str] = Field(default_factory=list)
    snapshot_failed: bool = False
    timed_out: bool = False


class HealthRead(BaseModel):
    """Liveness information for load balancers and dashboards."""

    status: str
    database: str
    scanner: str


__all__ = ["HealthRead", "ScanReportRead"]
