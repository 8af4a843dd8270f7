"""Domain entities exposed by the application."""

from .contact import ContactInfo
from .delivery import (
    CHANNEL_ORDER,
    DeliveryAttempt,
    DeliveryChannel,
    DeliveryResult,
    DeliveryStatus,
)
from .notification import (
    ORGANIZATION_NOTIFICATION_TYPES,
    Notification,
    NotificationCategory,
    NotificationPriority,
    NotificationType,
    get_notification_category,
    is_organization_notification,
)
from .organization import OrganizationInfo
from .preference import (
    DEFAULT_CHANNEL_PREFERENCES,
    ChannelPreference,
    PreferenceScope,
    PreferenceSource,
    ResolvedPreference,
    ensure_default_preferences_complete,
)

__all__ = [
    "CHANNEL_ORDER",
    "ChannelPreference",
    "ContactInfo",
    "DEFAULT_CHANNEL_PREFERENCES",
    "DeliveryAttempt",
    "DeliveryChannel",
    "DeliveryResult",
    "DeliveryStatus",
    "Notification",
    "NotificationCategory",
    "NotificationPriority",
    "NotificationType",
    "ORGANIZATION_NOTIFICATION_TYPES",
    "OrganizationInfo",
    "PreferenceScope",
    "PreferenceSource",
    "ResolvedPreference",
    "ensure_default_preferences_complete",
    "get_notification_category",
    "is_organization_notification",
]
