"""Domain entities describing delivery channels and their outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class DeliveryChannel(str, Enum):
    """Independent delivery mechanisms a notification can fan out to."""

    EMAIL = "email"
    PUSH = "push"
    SMS = "sms"


# Processing order within one invocation; attempt numbers follow it.
CHANNEL_ORDER: tuple[DeliveryChannel, ...] = (
    DeliveryChannel.EMAIL,
    DeliveryChannel.PUSH,
    DeliveryChannel.SMS,
)


class DeliveryStatus(str, Enum):
    """Outcome recorded for a single channel attempt."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED_PREFERENCE = "skipped_preference"
    SKIPPED_MISSING_CONTACT = "skipped_missing_contact"


@dataclass(frozen=True)
class DeliveryResult:
    """Uniform result returned by every channel transport."""

    status: DeliveryStatus
    error_message: str | None = None
    provider_response: dict[str, Any] | None = None

    @classmethod
    def success(cls, provider_response: dict[str, Any] | None = None) -> "DeliveryResult":
        return cls(status=DeliveryStatus.SUCCESS, provider_response=provider_response)

    @classmethod
    def failure(
        cls, message: str, provider_response: dict[str, Any] | None = None
    ) -> "DeliveryResult":
        return cls(
            status=DeliveryStatus.FAILED,
            error_message=message,
            provider_response=provider_response,
        )

    @property
    def succeeded(self) -> bool:
        return self.status is DeliveryStatus.SUCCESS


@dataclass
class DeliveryAttempt:
    """Append-only audit record for one channel of one dispatch invocation."""

    id: int | None
    notification_id: str
    attempt_number: int
    channel: DeliveryChannel
    status: DeliveryStatus
    error_message: str | None = None
    provider_response: dict[str, Any] | None = None
    created_at: datetime | None = None


__all__ = [
    "CHANNEL_ORDER",
    "DeliveryAttempt",
    "DeliveryChannel",
    "DeliveryResult",
    "DeliveryStatus",
]
