from .delivery_attempt import DeliveryAttemptRead
from .notification import NotificationRecord
from .preference import ResolvedPreferenceRead

__all__ = ["DeliveryAttemptRead", "NotificationRecord", "ResolvedPreferenceRead"]
