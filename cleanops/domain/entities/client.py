"""Domain entity representing a cleaning client."""

from dataclasses import dataclass
from datetime import datetime

CLIENT_TYPE_REGULAR = "regular"
CLIENT_TYPE_AIRBNB = "airbnb"
CLIENT_TYPE_SPORADIC = "esporadico"


@dataclass
class Client:
    """Identity of a customer whose property gets cleaned."""

    id: int | str | None
    name: str
    address: str | None = None
    type: str = CLIENT_TYPE_REGULAR
    email: str | None = None
    phone: str | None = None
    created_at: datetime | None = None


__all__ = [
    "Client",
    "CLIENT_TYPE_REGULAR",
    "CLIENT_TYPE_AIRBNB",
    "CLIENT_TYPE_SPORADIC",
]
