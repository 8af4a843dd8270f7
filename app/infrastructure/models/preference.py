"""SQLAlchemy models for explicit channel preferences."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, UniqueConstraint

from app.infrastructure.database import Base
from app.utils import now_in_utc_naive


class NotificationPreferenceModel(Base):
    """Per-user override of the default channel matrix."""

    __tablename__ = "notification_preference"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "notification_type", "channel", name="uq_notification_preference"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), nullable=False, index=True)
    notification_type = Column(String(50), nullable=False)
    channel = Column(String(10), nullable=False)
    enabled = Column(Boolean, nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_utc_naive)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_utc_naive)


class OrganizationNotificationPreferenceModel(Base):
    """Per-organization override of the default channel matrix."""

    __tablename__ = "organization_notification_preference"
    __table_args__ = (
        UniqueConstraint(
            "organization_id",
            "notification_type",
            "channel",
            name="uq_organization_notification_preference",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(String(36), nullable=False, index=True)
    notification_type = Column(String(50), nullable=False)
    channel = Column(String(10), nullable=False)
    enabled = Column(Boolean, nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_utc_naive)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_utc_naive)


__all__ = ["NotificationPreferenceModel", "OrganizationNotificationPreferenceModel"]
