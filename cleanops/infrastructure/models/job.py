"""SQLAlchemy model for scheduled cleanings."""

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from cleanops.infrastructure.database import Base
from cleanops.utils import now_in_app_naive_datetime


class JobModel(Base):
    """Database representation of a cleaning booked for a client."""

    __tablename__ = "job"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(
        Integer,
        ForeignKey("client.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    date = Column(Date(), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="scheduled", index=True)
    service_value = Column(Float, nullable=True)
    payment_date = Column(Date(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    client = relationship("ClientModel", lazy="joined")


__all__ = ["JobModel"]
