"""Channel preference entities and the compiled-in default matrix."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from .delivery import DeliveryChannel
from .notification import NotificationType


class PreferenceScope(str, Enum):
    """Owner of an explicit channel preference row."""

    USER = "user"
    ORGANIZATION = "organization"


class PreferenceSource(str, Enum):
    """Where a resolved preference value came from."""

    EXPLICIT = "explicit"
    DEFAULT = "default"


@dataclass(frozen=True)
class ChannelPreference:
    """Explicit (type, channel, enabled) setting for a user or organization."""

    scope: PreferenceScope
    owner_id: str
    notification_type: NotificationType
    channel: DeliveryChannel
    enabled: bool


@dataclass(frozen=True)
class ResolvedPreference:
    """Effective value for a (type, channel) pair after applying defaults."""

    notification_type: NotificationType
    channel: DeliveryChannel
    enabled: bool
    source: PreferenceSource


def _channels(email: bool, push: bool, sms: bool) -> Mapping[DeliveryChannel, bool]:
    return {
        DeliveryChannel.EMAIL: email,
        DeliveryChannel.PUSH: push,
        DeliveryChannel.SMS: sms,
    }


_T = NotificationType

DEFAULT_CHANNEL_PREFERENCES: Mapping[NotificationType, Mapping[DeliveryChannel, bool]] = {
    _T.MATCH_INVITATION: _channels(email=True, push=True, sms=False),
    _T.MATCH_JOIN_REQUEST: _channels(email=True, push=True, sms=False),
    _T.MATCH_JOIN_ACCEPTED: _channels(email=True, push=True, sms=False),
    _T.MATCH_JOIN_REJECTED: _channels(email=True, push=True, sms=False),
    _T.MATCH_PLAYER_JOINED: _channels(email=False, push=True, sms=False),
    _T.MATCH_CANCELLED: _channels(email=True, push=True, sms=True),
    _T.MATCH_UPDATED: _channels(email=False, push=True, sms=False),
    _T.MATCH_STARTING_SOON: _channels(email=False, push=True, sms=True),
    _T.MATCH_COMPLETED: _channels(email=False, push=True, sms=False),
    _T.MATCH_NEW_AVAILABLE: _channels(email=False, push=True, sms=False),
    _T.PLAYER_KICKED: _channels(email=True, push=True, sms=False),
    _T.PLAYER_LEFT: _channels(email=False, push=True, sms=False),
    _T.CHAT: _channels(email=False, push=True, sms=False),
    _T.NEW_MESSAGE: _channels(email=False, push=True, sms=False),
    _T.FRIEND_REQUEST: _channels(email=False, push=True, sms=False),
    _T.RATING_VERIFIED: _channels(email=True, push=True, sms=False),
    _T.REMINDER: _channels(email=False, push=True, sms=False),
    _T.PAYMENT: _channels(email=True, push=True, sms=False),
    _T.SUPPORT: _channels(email=True, push=False, sms=False),
    _T.SYSTEM: _channels(email=True, push=False, sms=False),
    _T.FEEDBACK_REQUEST: _channels(email=True, push=True, sms=False),
    _T.FEEDBACK_REMINDER: _channels(email=True, push=True, sms=False),
    _T.SCORE_CONFIRMATION: _channels(email=True, push=True, sms=False),
    _T.BOOKING_CREATED: _channels(email=True, push=False, sms=False),
    _T.BOOKING_CANCELLED_BY_PLAYER: _channels(email=True, push=False, sms=False),
    _T.BOOKING_MODIFIED: _channels(email=True, push=False, sms=False),
    _T.NEW_MEMBER_JOINED: _channels(email=True, push=False, sms=False),
    _T.MEMBER_LEFT: _channels(email=True, push=False, sms=False),
    _T.MEMBER_ROLE_CHANGED: _channels(email=True, push=False, sms=False),
    _T.PAYMENT_RECEIVED: _channels(email=True, push=False, sms=False),
    _T.PAYMENT_FAILED: _channels(email=True, push=False, sms=True),
    _T.REFUND_PROCESSED: _channels(email=True, push=False, sms=False),
    # Opt-in only.
    _T.DAILY_SUMMARY: _channels(email=False, push=False, sms=False),
    _T.WEEKLY_REPORT: _channels(email=True, push=False, sms=False),
    _T.BOOKING_CONFIRMED: _channels(email=True, push=False, sms=False),
    _T.BOOKING_REMINDER: _channels(email=True, push=False, sms=True),
    _T.BOOKING_CANCELLED_BY_ORG: _channels(email=True, push=False, sms=True),
    _T.MEMBERSHIP_APPROVED: _channels(email=True, push=False, sms=False),
    _T.ORG_ANNOUNCEMENT: _channels(email=True, push=False, sms=False),
    _T.PROGRAM_REGISTRATION_CONFIRMED: _channels(email=True, push=True, sms=False),
    _T.PROGRAM_REGISTRATION_CANCELLED: _channels(email=True, push=True, sms=True),
    _T.PROGRAM_SESSION_REMINDER: _channels(email=False, push=True, sms=True),
    _T.PROGRAM_SESSION_CANCELLED: _channels(email=True, push=True, sms=True),
    _T.PROGRAM_WAITLIST_PROMOTED: _channels(email=True, push=True, sms=False),
    _T.PROGRAM_PAYMENT_DUE: _channels(email=True, push=True, sms=False),
    _T.PROGRAM_PAYMENT_RECEIVED: _channels(email=True, push=False, sms=False),
}


def ensure_default_preferences_complete(
    table: Mapping[NotificationType, Mapping[DeliveryChannel, bool]] = DEFAULT_CHANNEL_PREFERENCES,
) -> None:
    """Raise ``RuntimeError`` unless ``table`` covers every type and channel."""

    missing_types = [t.value for t in NotificationType if t not in table]
    if missing_types:
        raise RuntimeError(
            "Default channel preferences missing for: " + ", ".join(sorted(missing_types))
        )
    for notification_type, channels in table.items():
        missing_channels = [c.value for c in DeliveryChannel if c not in channels]
        if missing_channels:
            raise RuntimeError(
                f"Default channel preferences for {notification_type.value} missing "
                f"channels: {', '.join(missing_channels)}"
            )


ensure_default_preferences_complete()


__all__ = [
    "ChannelPreference",
    "DEFAULT_CHANNEL_PREFERENCES",
    "PreferenceScope",
    "PreferenceSource",
    "ResolvedPreference",
    "ensure_default_preferences_complete",
]
