"""Read organizations that brand their notifications."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import OrganizationInfo
from app.infrastructure.models import OrganizationModel


class OrganizationRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, organization_id: str) -> OrganizationInfo | None:
        model = self.session.get(OrganizationModel, organization_id)
        if model is None:
            return None
        return OrganizationInfo(
            id=model.id,
            name=model.name,
            email=model.email,
            website=model.website,
        )


__all__ = ["OrganizationRepository"]
