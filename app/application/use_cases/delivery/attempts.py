"""Use cases reading the delivery audit log."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import DeliveryAttempt
from app.infrastructure.repositories import DeliveryAttemptRepository


def list_delivery_attempts(session: Session, notification_id: str) -> Sequence[DeliveryAttempt]:
    """Return every recorded attempt for ``notification_id``, oldest first."""

    return DeliveryAttemptRepository(session).list_for_notification(notification_id)
