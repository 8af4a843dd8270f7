"""SQLAlchemy model for the delivery audit log."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_utc_naive


class DeliveryAttemptModel(Base):
    """Append-only record of one channel attempt for a notification."""

    __tablename__ = "delivery_attempt"

    id = Column(Integer, primary_key=True, index=True)
    notification_id = Column(
        String(36),
        ForeignKey("notification.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attempt_number = Column(Integer, nullable=False)
    channel = Column(String(10), nullable=False)
    status = Column(String(32), nullable=False)
    error_message = Column(Text, nullable=True)
    provider_response = Column(JSON, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_utc_naive)


__all__ = ["DeliveryAttemptModel"]
