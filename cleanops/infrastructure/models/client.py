"""SQLAlchemy model for clients."""

from sqlalchemy import Column, DateTime, Integer, String

from cleanops.infrastructure.database import Base
from cleanops.utils import now_in_app_naive_datetime


class ClientModel(Base):
    """Database representation of a cleaning client."""

    __tablename__ = "client"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    address = Column(String(255), nullable=True)
    type = Column(String(20), nullable=False, default="regular")
    email = Column(String(120), nullable=True)
    phone = Column(String(40), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["ClientModel"]
