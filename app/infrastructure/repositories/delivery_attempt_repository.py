"""Persistence helpers for the delivery audit log."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import DeliveryAttempt, DeliveryChannel, DeliveryStatus
from app.infrastructure.models import DeliveryAttemptModel
from app.utils import ensure_naive_utc, ensure_utc, now_in_utc_naive


class DeliveryAttemptRepository:
    """Append and list :class:`DeliveryAttempt` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, attempt: DeliveryAttempt) -> DeliveryAttempt:
        model = DeliveryAttemptModel(
            notification_id=attempt.notification_id,
            attempt_number=attempt.attempt_number,
            channel=attempt.channel.value,
            status=attempt.status.value,
            error_message=attempt.error_message,
            provider_response=attempt.provider_response,
            created_at=ensure_naive_utc(attempt.created_at) or now_in_utc_naive(),
        )
        self.session.add(model)
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_notification(self, notification_id: str) -> Sequence[DeliveryAttempt]:
        query = (
            self.session.query(DeliveryAttemptModel)
            .filter(DeliveryAttemptModel.notification_id == notification_id)
            .order_by(
                DeliveryAttemptModel.created_at.asc(),
                DeliveryAttemptModel.attempt_number.asc(),
                DeliveryAttemptModel.id.asc(),
            )
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: DeliveryAttemptModel) -> DeliveryAttempt:
        return DeliveryAttempt(
            id=model.id,
            notification_id=model.notification_id,
            attempt_number=model.attempt_number,
            channel=DeliveryChannel(model.channel),
            status=DeliveryStatus(model.status),
            error_message=model.error_message,
            provider_response=model.provider_response,
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["DeliveryAttemptRepository"]
