"""Persistence helpers for notification entities."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationPriority, NotificationType
from app.infrastructure.models import NotificationModel
from app.utils import ensure_naive_utc, ensure_utc, now_in_utc_naive


class NotificationRepository:
    """Load and store :class:`Notification` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: str) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return None
        return self._to_entity(model)

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(id=notification.id)
        self._apply_entity_to_model(model, notification)
        model.created_at = ensure_naive_utc(notification.created_at) or now_in_utc_naive()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.user_id = notification.user_id
        model.type = notification.type.value
        model.target_id = notification.target_id
        model.title = notification.title
        model.body = notification.body
        model.payload = notification.payload or {}
        model.priority = notification.priority.value
        model.scheduled_at = ensure_naive_utc(notification.scheduled_at)
        model.expires_at = ensure_naive_utc(notification.expires_at)
        model.read_at = ensure_naive_utc(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=NotificationType(model.type),
            title=model.title,
            body=model.body,
            target_id=model.target_id,
            payload=model.payload or {},
            priority=NotificationPriority(model.priority or NotificationPriority.NORMAL.value),
            scheduled_at=ensure_utc(model.scheduled_at),
            expires_at=ensure_utc(model.expires_at),
            read_at=ensure_utc(model.read_at),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["NotificationRepository"]
