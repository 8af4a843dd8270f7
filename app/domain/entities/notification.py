"""Domain entity representing a notification handed to the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    """Closed set of notification types the dispatcher knows how to deliver."""

    MATCH_INVITATION = "match_invitation"
    MATCH_JOIN_REQUEST = "match_join_request"
    MATCH_JOIN_ACCEPTED = "match_join_accepted"
    MATCH_JOIN_REJECTED = "match_join_rejected"
    MATCH_PLAYER_JOINED = "match_player_joined"
    MATCH_CANCELLED = "match_cancelled"
    MATCH_UPDATED = "match_updated"
    MATCH_STARTING_SOON = "match_starting_soon"
    MATCH_COMPLETED = "match_completed"
    MATCH_NEW_AVAILABLE = "match_new_available"
    PLAYER_KICKED = "player_kicked"
    PLAYER_LEFT = "player_left"
    CHAT = "chat"
    NEW_MESSAGE = "new_message"
    FRIEND_REQUEST = "friend_request"
    RATING_VERIFIED = "rating_verified"
    REMINDER = "reminder"
    PAYMENT = "payment"
    SUPPORT = "support"
    SYSTEM = "system"
    FEEDBACK_REQUEST = "feedback_request"
    FEEDBACK_REMINDER = "feedback_reminder"
    SCORE_CONFIRMATION = "score_confirmation"
    BOOKING_CREATED = "booking_created"
    BOOKING_CANCELLED_BY_PLAYER = "booking_cancelled_by_player"
    BOOKING_MODIFIED = "booking_modified"
    NEW_MEMBER_JOINED = "new_member_joined"
    MEMBER_LEFT = "member_left"
    MEMBER_ROLE_CHANGED = "member_role_changed"
    PAYMENT_RECEIVED = "payment_received"
    PAYMENT_FAILED = "payment_failed"
    REFUND_PROCESSED = "refund_processed"
    DAILY_SUMMARY = "daily_summary"
    WEEKLY_REPORT = "weekly_report"
    BOOKING_CONFIRMED = "booking_confirmed"
    BOOKING_REMINDER = "booking_reminder"
    BOOKING_CANCELLED_BY_ORG = "booking_cancelled_by_org"
    MEMBERSHIP_APPROVED = "membership_approved"
    ORG_ANNOUNCEMENT = "org_announcement"
    PROGRAM_REGISTRATION_CONFIRMED = "program_registration_confirmed"
    PROGRAM_REGISTRATION_CANCELLED = "program_registration_cancelled"
    PROGRAM_SESSION_REMINDER = "program_session_reminder"
    PROGRAM_SESSION_CANCELLED = "program_session_cancelled"
    PROGRAM_WAITLIST_PROMOTED = "program_waitlist_promoted"
    PROGRAM_PAYMENT_DUE = "program_payment_due"
    PROGRAM_PAYMENT_RECEIVED = "program_payment_received"


class NotificationPriority(str, Enum):
    """Urgency attached to a notification by the producer."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class NotificationCategory(str, Enum):
    """Coarse grouping of notification types."""

    MATCH = "match"
    SOCIAL = "social"
    SYSTEM = "system"
    ORGANIZATION = "organization"


_T = NotificationType

# Types whose preferences and branding resolve against an organization.
ORGANIZATION_NOTIFICATION_TYPES: frozenset[NotificationType] = frozenset(
    {
        _T.BOOKING_CREATED,
        _T.BOOKING_CANCELLED_BY_PLAYER,
        _T.BOOKING_MODIFIED,
        _T.NEW_MEMBER_JOINED,
        _T.MEMBER_LEFT,
        _T.MEMBER_ROLE_CHANGED,
        _T.PAYMENT_RECEIVED,
        _T.PAYMENT_FAILED,
        _T.REFUND_PROCESSED,
        _T.DAILY_SUMMARY,
        _T.WEEKLY_REPORT,
        _T.BOOKING_CONFIRMED,
        _T.BOOKING_REMINDER,
        _T.BOOKING_CANCELLED_BY_ORG,
        _T.MEMBERSHIP_APPROVED,
        _T.ORG_ANNOUNCEMENT,
    }
)

_SOCIAL_TYPES = frozenset({_T.CHAT, _T.NEW_MESSAGE, _T.FRIEND_REQUEST, _T.RATING_VERIFIED})
_SYSTEM_TYPES = frozenset({_T.REMINDER, _T.PAYMENT, _T.SUPPORT, _T.SYSTEM})
_PROGRAM_TYPES = frozenset(
    notification_type
    for notification_type in NotificationType
    if notification_type.value.startswith("program_")
)


def get_notification_category(notification_type: NotificationType) -> NotificationCategory:
    """Return the category ``notification_type`` belongs to."""

    if notification_type in ORGANIZATION_NOTIFICATION_TYPES or notification_type in _PROGRAM_TYPES:
        return NotificationCategory.ORGANIZATION
    if notification_type in _SOCIAL_TYPES:
        return NotificationCategory.SOCIAL
    if notification_type in _SYSTEM_TYPES:
        return NotificationCategory.SYSTEM
    return NotificationCategory.MATCH


def is_organization_notification(notification_type: NotificationType) -> bool:
    """Return whether ``notification_type`` is organization-scoped."""

    return notification_type in ORGANIZATION_NOTIFICATION_TYPES


@dataclass
class Notification:
    """One event to deliver to a recipient across the delivery channels."""

    id: str
    user_id: str
    type: NotificationType
    title: str
    body: str | None = None
    target_id: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    priority: NotificationPriority = NotificationPriority.NORMAL
    scheduled_at: datetime | None = None
    expires_at: datetime | None = None
    read_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def organization_id(self) -> str | None:
        """Organization identifier embedded in the payload, if any."""

        value = (self.payload or {}).get("organizationId")
        return str(value) if value else None

    @property
    def category(self) -> NotificationCategory:
        return get_notification_category(self.type)


__all__ = [
    "Notification",
    "NotificationCategory",
    "NotificationPriority",
    "NotificationType",
    "ORGANIZATION_NOTIFICATION_TYPES",
    "get_notification_category",
    "is_organization_notification",
]
