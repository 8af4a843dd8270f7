"""Endpoints exposing the effective channel preferences."""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.application.use_cases.delivery import (
    get_organization_preference_matrix,
    get_user_preference_matrix,
)
from app.domain.entities import ResolvedPreference
from app.infrastructure.database import get_db
from app.interfaces.api.schemas import ResolvedPreferenceRead

router = APIRouter(tags=["preferences"])


def _to_schema(preferences: Sequence[ResolvedPreference]) -> list[ResolvedPreferenceRead]:
    return [
        ResolvedPreferenceRead(
            notification_type=item.notification_type,
            channel=item.channel,
            enabled=item.enabled,
            source=item.source,
        )
        for item in preferences
    ]


@router.get(
    "/users/{user_id}/notification-preferences",
    response_model=list[ResolvedPreferenceRead],
)
def list_user_notification_preferences(
    user_id: str,
    db: Session = Depends(get_db),
) -> list[ResolvedPreferenceRead]:
    """Return the user's value for every notification type and channel."""

    return _to_schema(get_user_preference_matrix(db, user_id))


@router.get(
    "/organizations/{organization_id}/notification-preferences",
    response_model=list[ResolvedPreferenceRead],
)
def list_organization_notification_preferences(
    organization_id: str,
    db: Session = Depends(get_db),
) -> list[ResolvedPreferenceRead]:
    return _to_schema(get_organization_preference_matrix(db, organization_id))
