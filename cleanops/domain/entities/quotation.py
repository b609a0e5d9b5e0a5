"""Domain entity representing a price quotation sent to a prospect."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Quotation:
    """A quotation awaiting an answer from ``client_name``."""

    id: int | str | None
    client_name: str | None
    created_at: datetime
    total_value: float | None = None


__all__ = ["Quotation"]
