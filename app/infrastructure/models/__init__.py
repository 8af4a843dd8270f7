"""ORM models used by the application infrastructure."""

from .delivery_attempt import DeliveryAttemptModel
from .notification import NotificationModel
from .organization import OrganizationModel
from .preference import NotificationPreferenceModel, OrganizationNotificationPreferenceModel
from .profile import PlayerModel, ProfileModel

__all__ = [
    "DeliveryAttemptModel",
    "NotificationModel",
    "NotificationPreferenceModel",
    "OrganizationModel",
    "OrganizationNotificationPreferenceModel",
    "PlayerModel",
    "ProfileModel",
]
