"""SQLAlchemy models holding recipient contact details."""

from sqlalchemy import Boolean, Column, ForeignKey, String

from app.infrastructure.database import Base


class ProfileModel(Base):
    """Account-level profile with email and phone contact details."""

    __tablename__ = "profile"

    id = Column(String(36), primary_key=True)
    display_name = Column(String(120), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(32), nullable=True)
    phone_verified = Column(Boolean, nullable=False, default=False)


class PlayerModel(Base):
    """Player record sharing the profile id, holding the push registration."""

    __tablename__ = "player"

    id = Column(String(36), ForeignKey("profile.id", ondelete="CASCADE"), primary_key=True)
    expo_push_token = Column(String(255), nullable=True)
    push_notifications_enabled = Column(Boolean, nullable=False, default=True)


__all__ = ["PlayerModel", "ProfileModel"]
