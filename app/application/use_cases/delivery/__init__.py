"""Use cases delivering notifications across channels."""

from .attempts import list_delivery_attempts
from .contacts import ContactCheck, is_valid_phone_number, normalize_phone_number, validate_contact
from .dispatcher import (
    CONTACT_FETCH_FAILED_MESSAGE,
    ChannelTransports,
    DispatchReport,
    NotificationDispatcher,
)
from .preference_matrix import get_organization_preference_matrix, get_user_preference_matrix
from .preferences import resolve_enabled_channels, resolve_preferences
from .redispatch import dispatch_stored_notification
from .requests import (
    INVALID_REQUEST_MESSAGE,
    InvalidDispatchRequest,
    is_scheduled_for_later,
    unwrap_notification_record,
)

__all__ = [
    "CONTACT_FETCH_FAILED_MESSAGE",
    "ChannelTransports",
    "ContactCheck",
    "DispatchReport",
    "INVALID_REQUEST_MESSAGE",
    "InvalidDispatchRequest",
    "NotificationDispatcher",
    "dispatch_stored_notification",
    "get_organization_preference_matrix",
    "get_user_preference_matrix",
    "is_scheduled_for_later",
    "is_valid_phone_number",
    "list_delivery_attempts",
    "normalize_phone_number",
    "resolve_enabled_channels",
    "resolve_preferences",
    "unwrap_notification_record",
    "validate_contact",
]
