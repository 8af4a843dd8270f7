"""Unwrap inbound dispatch requests into notification records."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from app.domain.entities import Notification
from app.utils import is_in_future

INVALID_REQUEST_MESSAGE = "Invalid request format"
INSERT_EVENT = "INSERT"
NOTIFICATION_TABLE = "notification"
REQUIRED_FIELDS = ("id", "user_id", "type")


class InvalidDispatchRequest(ValueError):
    """Raised when an inbound body is neither a trigger envelope nor a notification."""

    def __init__(self, message: str = INVALID_REQUEST_MESSAGE) -> None:
        super().__init__(message)


def unwrap_notification_record(body: Any) -> dict[str, Any]:
    """Return the notification record carried by ``body``.

    ``body`` is either a database trigger envelope
    (``{"type": "INSERT", "table": "notification", "record": {...}}``) or the
    notification itself with at least ``id``, ``user_id`` and ``type``.
    """

    if not isinstance(body, Mapping):
        raise InvalidDispatchRequest()

    record = body.get("record")
    if body.get("type") == INSERT_EVENT and isinstance(record, Mapping):
        if body.get("table") not in (None, NOTIFICATION_TABLE):
            raise InvalidDispatchRequest()
        candidate = record
    else:
        # UPDATE and DELETE envelopes carry no id or user_id at the top level.
        candidate = body

    if any(not candidate.get(field) for field in REQUIRED_FIELDS):
        raise InvalidDispatchRequest()
    return dict(candidate)


def is_scheduled_for_later(notification: Notification, *, now: datetime | None = None) -> bool:
    """Return whether ``notification`` must wait for a later scheduler run."""

    return is_in_future(notification.scheduled_at, now=now)


__all__ = [
    "INVALID_REQUEST_MESSAGE",
    "InvalidDispatchRequest",
    "is_scheduled_for_later",
    "unwrap_notification_record",
]
