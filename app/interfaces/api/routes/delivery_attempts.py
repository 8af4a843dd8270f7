"""Endpoints exposing the delivery audit log."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.application.use_cases.delivery import list_delivery_attempts
from app.domain.entities import DeliveryAttempt
from app.infrastructure.database import get_db
from app.interfaces.api.schemas import DeliveryAttemptRead

router = APIRouter(prefix="/notifications", tags=["delivery-attempts"])


def _attempt_to_schema(attempt: DeliveryAttempt) -> DeliveryAttemptRead:
    return DeliveryAttemptRead(
        id=attempt.id or 0,
        notification_id=attempt.notification_id,
        attempt_number=attempt.attempt_number,
        channel=attempt.channel,
        status=attempt.status,
        error_message=attempt.error_message,
        provider_response=attempt.provider_response,
        created_at=attempt.created_at,
    )


@router.get(
    "/{notification_id}/delivery-attempts",
    response_model=list[DeliveryAttemptRead],
)
def list_notification_delivery_attempts(
    notification_id: str,
    db: Session = Depends(get_db),
) -> list[DeliveryAttemptRead]:
    """Return every recorded channel attempt for a notification, oldest first."""

    attempts = list_delivery_attempts(db, notification_id)
    return [_attempt_to_schema(attempt) for attempt in attempts]
