"""SQLAlchemy model for organizations sending branded notifications."""

from sqlalchemy import Column, String

from app.infrastructure.database import Base


class OrganizationModel(Base):
    __tablename__ = "organization"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    website = Column(String(255), nullable=True)


__all__ = ["OrganizationModel"]
