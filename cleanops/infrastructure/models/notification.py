"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text

from cleanops.infrastructure.database import Base
from cleanops.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for audience notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index(
            "ix_notification_dedup",
            "kind",
            "audience",
            "subject_key",
            "created_at",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    audience = Column(String(20), nullable=False, index=True)
    kind = Column(String(40), nullable=False)
    subject_key = Column(String(120), nullable=False)
    title = Column(String(120), nullable=False)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    read = Column(Boolean, nullable=False, default=False)


__all__ = ["NotificationModel"]
