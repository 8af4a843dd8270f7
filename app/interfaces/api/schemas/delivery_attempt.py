"""Pydantic models describing the delivery audit log."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from app.domain.entities import DeliveryChannel, DeliveryStatus


class DeliveryAttemptRead(BaseModel):
    """Representation of one recorded channel attempt."""

    id: int
    notification_id: str
    attempt_number: int
    channel: DeliveryChannel
    status: DeliveryStatus
    error_message: str | None = None
    provider_response: dict[str, Any] | None = None
    created_at: datetime | None = None


__all__ = ["DeliveryAttemptRead"]
