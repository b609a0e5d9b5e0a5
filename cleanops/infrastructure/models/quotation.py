"""SQLAlchemy model for quotations."""

from sqlalchemy import Column, DateTime, Float, Integer, String

from cleanops.infrastructure.database import Base
from cleanops.utils import now_in_app_naive_datetime


class QuotationModel(Base):
    """Database representation of a quotation sent to a prospect."""

    __tablename__ = "quotation"

    id = Column(Integer, primary_key=True, index=True)
    client_name = Column(String(120), nullable=True)
    total_value = Column(Float, nullable=True)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )


__all__ = ["QuotationModel"]
