"""Pydantic models describing effective channel preferences."""

from __future__ import annotations

from pydantic import BaseModel

from app.domain.entities import DeliveryChannel, NotificationType, PreferenceSource


class ResolvedPreferenceRead(BaseModel):
    """Effective value of one (type, channel) pair."""

    notification_type: NotificationType
    channel: DeliveryChannel
    enabled: bool
    source: PreferenceSource


__all__ = ["ResolvedPreferenceRead"]
