"""Pydantic models describing inbound notification records."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.entities import Notification, NotificationPriority, NotificationType


class NotificationRecord(BaseModel):
    """Notification row as delivered by the insert trigger or a direct call."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    type: NotificationType
    target_id: str | None = None
    title: str = ""
    body: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    priority: NotificationPriority = NotificationPriority.NORMAL
    scheduled_at: datetime | None = None
    expires_at: datetime | None = None
    read_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("payload", mode="before")
    @classmethod
    def _default_payload(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("priority", mode="before")
    @classmethod
    def _default_priority(cls, value: Any) -> Any:
        return NotificationPriority.NORMAL if value in (None, "") else value

    @field_validator("title", mode="before")
    @classmethod
    def _default_title(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_entity(self) -> Notification:
        return Notification(
            id=self.id,
            user_id=self.user_id,
            type=self.type,
            title=self.title,
            body=self.body,
            target_id=self.target_id,
            payload=dict(self.payload),
            priority=self.priority,
            scheduled_at=self.scheduled_at,
            expires_at=self.expires_at,
            read_at=self.read_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


__all__ = ["NotificationRecord"]
