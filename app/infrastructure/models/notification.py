"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Column, DateTime, JSON, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_utc_naive


class NotificationModel(Base):
    """Database representation for notifications awaiting or after delivery."""

    __tablename__ = "notification"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    target_id = Column(String(36), nullable=True)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=True)
    payload = Column(JSON, nullable=False, default=dict)
    priority = Column(String(10), nullable=False, default="normal")
    scheduled_at = Column(DateTime(), nullable=True)
    expires_at = Column(DateTime(), nullable=True)
    read_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_utc_naive)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_utc_naive)


__all__ = ["NotificationModel"]
