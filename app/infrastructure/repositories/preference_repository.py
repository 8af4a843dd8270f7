"""Persistence helpers for explicit channel preferences."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import (
    ChannelPreference,
    DeliveryChannel,
    NotificationType,
    PreferenceScope,
)
from app.infrastructure.models import (
    NotificationPreferenceModel,
    OrganizationNotificationPreferenceModel,
)

logger = logging.getLogger(__name__)

PreferenceModel = NotificationPreferenceModel | OrganizationNotificationPreferenceModel


def _parse_channel(value: str) -> DeliveryChannel | None:
    try:
        return DeliveryChannel(value)
    except ValueError:
        logger.warning("Ignoring preference row with unknown channel %r", value)
        return None


class PreferenceRepository:
    """Read and write user and organization channel preferences."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_user_preferences(
        self, user_id: str, notification_type: NotificationType
    ) -> dict[DeliveryChannel, bool]:
        """Return the explicit per-channel values a user set for one type."""

        rows = (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.user_id == user_id)
            .filter(NotificationPreferenceModel.notification_type == notification_type.value)
            .all()
        )
        return self._to_channel_map(rows)

    def get_organization_preferences(
        self, organization_id: str, notification_type: NotificationType
    ) -> dict[DeliveryChannel, bool]:
        """Return the explicit per-channel values an organization set for one type."""

        rows = (
            self.session.query(OrganizationNotificationPreferenceModel)
            .filter(OrganizationNotificationPreferenceModel.organization_id == organization_id)
            .filter(
                OrganizationNotificationPreferenceModel.notification_type
                == notification_type.value
            )
            .all()
        )
        return self._to_channel_map(rows)

    def list_user_preferences(self, user_id: str) -> Sequence[ChannelPreference]:
        rows = (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.user_id == user_id)
            .order_by(NotificationPreferenceModel.id.asc())
            .all()
        )
        return self._to_entities(rows, PreferenceScope.USER, user_id)

    def list_organization_preferences(self, organization_id: str) -> Sequence[ChannelPreference]:
        rows = (
            self.session.query(OrganizationNotificationPreferenceModel)
            .filter(OrganizationNotificationPreferenceModel.organization_id == organization_id)
            .order_by(OrganizationNotificationPreferenceModel.id.asc())
            .all()
        )
        return self._to_entities(rows, PreferenceScope.ORGANIZATION, organization_id)

    def set_user_preference(
        self,
        user_id: str,
        notification_type: NotificationType,
        channel: DeliveryChannel,
        enabled: bool,
    ) -> ChannelPreference:
        model = (
            self.session.query(NotificationPreferenceModel)
            .filter_by(
                user_id=user_id,
                notification_type=notification_type.value,
                channel=channel.value,
            )
            .one_or_none()
        )
        if model is None:
            model = NotificationPreferenceModel(
                user_id=user_id,
                notification_type=notification_type.value,
                channel=channel.value,
            )
        model.enabled = enabled
        self.session.add(model)
        self.session.commit()
        return ChannelPreference(
            scope=PreferenceScope.USER,
            owner_id=user_id,
            notification_type=notification_type,
            channel=channel,
            enabled=enabled,
        )

    def set_organization_preference(
        self,
        organization_id: str,
        notification_type: NotificationType,
        channel: DeliveryChannel,
        enabled: bool,
    ) -> ChannelPreference:
        model = (
            self.session.query(OrganizationNotificationPreferenceModel)
            .filter_by(
                organization_id=organization_id,
                notification_type=notification_type.value,
                channel=channel.value,
            )
            .one_or_none()
        )
        if model is None:
            model = OrganizationNotificationPreferenceModel(
                organization_id=organization_id,
                notification_type=notification_type.value,
                channel=channel.value,
            )
        model.enabled = enabled
        self.session.add(model)
        self.session.commit()
        return ChannelPreference(
            scope=PreferenceScope.ORGANIZATION,
            owner_id=organization_id,
            notification_type=notification_type,
            channel=channel,
            enabled=enabled,
        )

    @staticmethod
    def _to_channel_map(rows: Sequence[PreferenceModel]) -> dict[DeliveryChannel, bool]:
        explicit: dict[DeliveryChannel, bool] = {}
        for row in rows:
            channel = _parse_channel(row.channel)
            if channel is not None:
                explicit[channel] = bool(row.enabled)
        return explicit

    @staticmethod
    def _to_entities(
        rows: Sequence[PreferenceModel], scope: PreferenceScope, owner_id: str
    ) -> list[ChannelPreference]:
        preferences: list[ChannelPreference] = []
        for row in rows:
            channel = _parse_channel(row.channel)
            try:
                notification_type = NotificationType(row.notification_type)
            except ValueError:
                logger.warning(
                    "Ignoring preference row with unknown type %r", row.notification_type
                )
                continue
            if channel is None:
                continue
            preferences.append(
                ChannelPreference(
                    scope=scope,
                    owner_id=owner_id,
                    notification_type=notification_type,
                    channel=channel,
                    enabled=bool(row.enabled),
                )
            )
        return preferences


__all__ = ["PreferenceRepository"]
