"""Repository implementations for infrastructure layer."""

from .contact_repository import ContactRepository
from .delivery_attempt_repository import DeliveryAttemptRepository
from .notification_repository import NotificationRepository
from .organization_repository import OrganizationRepository
from .preference_repository import PreferenceRepository

__all__ = [
    "ContactRepository",
    "DeliveryAttemptRepository",
    "NotificationRepository",
    "OrganizationRepository",
    "PreferenceRepository",
]
