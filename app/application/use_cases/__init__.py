"""Aggregate application use cases."""

from .delivery import (
    NotificationDispatcher,
    dispatch_stored_notification,
    list_delivery_attempts,
)

__all__ = [
    "NotificationDispatcher",
    "dispatch_stored_notification",
    "list_delivery_attempts",
]
