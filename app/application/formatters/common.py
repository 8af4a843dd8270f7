"""Shared helpers for rendering notification content on every channel."""

from __future__ import annotations

import html
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Final

from app.domain.entities import Notification, NotificationType

DEFAULT_ACCENT_COLOR: Final[str] = "#4DB8A8"
DEFAULT_CURRENCY: Final[str] = "CAD"
FALLBACK_LINK_PATH: Final[str] = "notifications"

SPORT_COLORS: Final[Mapping[str, str]] = {
    "tennis": "#C5D93D",
    "pickleball": "#F5A623",
    "padel": "#2E86DE",
    "badminton": "#8E44AD",
    "squash": "#E74C3C",
    "table tennis": "#16A085",
}

SPORT_EMOJIS: Final[Mapping[str, str]] = {
    "tennis": "\U0001F3BE",
    "pickleball": "\U0001F3D3",
    "padel": "\U0001F3BE",
    "badminton": "\U0001F3F8",
    "table tennis": "\U0001F3D3",
}

_CURRENCY_SYMBOLS: Final[Mapping[str, str]] = {
    "CAD": "$",
    "USD": "US$",
    "EUR": "€",
    "GBP": "£",
}


@dataclass(frozen=True)
class Branding:
    """Brand values injected into every rendered message."""

    app_name: str = "Rallia"
    deep_link_scheme: str = "rallia://"
    accent_color: str = DEFAULT_ACCENT_COLOR

    def link(self, path: str) -> str:
        return f"{self.deep_link_scheme}{path.lstrip('/')}"

    @property
    def preferences_link(self) -> str:
        return self.link("settings/notifications")

    @property
    def organization_preferences_link(self) -> str:
        return self.link("dashboard/settings/notifications")


@dataclass(frozen=True)
class CallToAction:
    """Button label plus a deep-link path template (``{target_id}`` aware)."""

    label: str
    path: str

    def resolve(self, branding: Branding, target_id: str | None) -> str:
        if "{target_id}" in self.path:
            if not target_id:
                return branding.link(FALLBACK_LINK_PATH)
            return branding.link(self.path.format(target_id=target_id))
        return branding.link(self.path)


_T = NotificationType

DEFAULT_CALL_TO_ACTION = CallToAction("View Details", FALLBACK_LINK_PATH)

CALL_TO_ACTIONS: Final[Mapping[NotificationType, CallToAction]] = {
    _T.MATCH_INVITATION: CallToAction("View Invitation", "match/{target_id}"),
    _T.MATCH_JOIN_REQUEST: CallToAction("Review Request", "match/{target_id}"),
    _T.MATCH_JOIN_ACCEPTED: CallToAction("View Game", "match/{target_id}"),
    _T.MATCH_JOIN_REJECTED: CallToAction("Find Games", "matches"),
    _T.MATCH_PLAYER_JOINED: CallToAction("View Game", "match/{target_id}"),
    _T.MATCH_CANCELLED: CallToAction("Find Another Game", "matches"),
    _T.MATCH_UPDATED: CallToAction("View Changes", "match/{target_id}"),
    _T.MATCH_STARTING_SOON: CallToAction("View Game", "match/{target_id}"),
    _T.MATCH_COMPLETED: CallToAction("Share Feedback", "feedback/{target_id}"),
    _T.MATCH_NEW_AVAILABLE: CallToAction("View Game", "match/{target_id}"),
    _T.PLAYER_KICKED: CallToAction("Find Games", "matches"),
    _T.PLAYER_LEFT: CallToAction("View Game", "match/{target_id}"),
    _T.CHAT: CallToAction("Open Chat", "chat/{target_id}"),
    _T.NEW_MESSAGE: CallToAction("Open Chat", "chat/{target_id}"),
    _T.FRIEND_REQUEST: CallToAction("View Profile", "player/{target_id}"),
    _T.RATING_VERIFIED: CallToAction("View Profile", "profile"),
    _T.REMINDER: CallToAction("View Game", "match/{target_id}"),
    _T.PAYMENT: CallToAction("View Payment", "payments"),
    _T.FEEDBACK_REQUEST: CallToAction("Rate Your Game", "feedback/{target_id}"),
    _T.FEEDBACK_REMINDER: CallToAction("Rate Your Game", "feedback/{target_id}"),
    _T.SCORE_CONFIRMATION: CallToAction("Confirm Score", "match/{target_id}"),
    _T.BOOKING_CREATED: CallToAction("View Booking", "dashboard/bookings"),
    _T.BOOKING_CANCELLED_BY_PLAYER: CallToAction("View Booking", "dashboard/bookings"),
    _T.BOOKING_MODIFIED: CallToAction("View Booking", "dashboard/bookings"),
    _T.BOOKING_CONFIRMED: CallToAction("View Booking", "dashboard/bookings"),
    _T.BOOKING_REMINDER: CallToAction("View Booking", "dashboard/bookings"),
    _T.BOOKING_CANCELLED_BY_ORG: CallToAction("View Booking", "dashboard/bookings"),
    _T.NEW_MEMBER_JOINED: CallToAction("View Members", "dashboard/members"),
    _T.MEMBER_LEFT: CallToAction("View Members", "dashboard/members"),
    _T.MEMBER_ROLE_CHANGED: CallToAction("View Members", "dashboard/members"),
    _T.MEMBERSHIP_APPROVED: CallToAction("View Members", "dashboard/members"),
    _T.PAYMENT_RECEIVED: CallToAction("View Payments", "dashboard/payments"),
    _T.PAYMENT_FAILED: CallToAction("View Payments", "dashboard/payments"),
    _T.REFUND_PROCESSED: CallToAction("View Payments", "dashboard/payments"),
    _T.DAILY_SUMMARY: CallToAction("View Report", "dashboard/reports"),
    _T.WEEKLY_REPORT: CallToAction("View Report", "dashboard/reports"),
    _T.ORG_ANNOUNCEMENT: CallToAction("View Announcement", "dashboard"),
    _T.PROGRAM_REGISTRATION_CONFIRMED: CallToAction("View Program", "programs/{target_id}"),
    _T.PROGRAM_REGISTRATION_CANCELLED: CallToAction("View Program", "programs/{target_id}"),
    _T.PROGRAM_SESSION_REMINDER: CallToAction("View Session", "programs/{target_id}"),
    _T.PROGRAM_SESSION_CANCELLED: CallToAction("View Program", "programs/{target_id}"),
    _T.PROGRAM_WAITLIST_PROMOTED: CallToAction("View Program", "programs/{target_id}"),
    _T.PROGRAM_PAYMENT_DUE: CallToAction("Pay Now", "payments"),
    _T.PROGRAM_PAYMENT_RECEIVED: CallToAction("View Payment", "payments"),
}

BOOKING_TYPES: Final[frozenset[NotificationType]] = frozenset(
    t for t in NotificationType if t.value.startswith("booking_")
)
PAYMENT_TYPES: Final[frozenset[NotificationType]] = frozenset(
    {
        _T.PAYMENT,
        _T.PAYMENT_RECEIVED,
        _T.PAYMENT_FAILED,
        _T.REFUND_PROCESSED,
        _T.PROGRAM_PAYMENT_DUE,
        _T.PROGRAM_PAYMENT_RECEIVED,
    }
)
FEEDBACK_TYPES: Final[frozenset[NotificationType]] = frozenset(
    {_T.FEEDBACK_REQUEST, _T.FEEDBACK_REMINDER, _T.SCORE_CONFIRMATION}
)
CHAT_TYPES: Final[frozenset[NotificationType]] = frozenset({_T.CHAT, _T.NEW_MESSAGE})


def escape_html(value: Any) -> str:
    """Escape ``value`` for safe interpolation into HTML."""

    return html.escape(str(value), quote=True)


def payload_text(payload: Mapping[str, Any] | None, key: str) -> str | None:
    """Return a trimmed, non-empty string stored under ``key``."""

    if not payload:
        return None
    value = payload.get(key)
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def payload_int(payload: Mapping[str, Any] | None, key: str) -> int | None:
    """Return an integer stored under ``key`` (numeric strings accepted)."""

    if not payload:
        return None
    value = payload.get(key)
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def sport_tag(notification: Notification) -> str | None:
    """Return the lower-cased sport name carried in the payload, if any."""

    sport = payload_text(notification.payload, "sportName")
    return sport.lower() if sport else None


def format_when(
    date: str | None, start_time: str | None, end_time: str | None = None
) -> str | None:
    """Join a date with an optional time or time range."""

    if start_time and end_time:
        time_text = f"{start_time} - {end_time}"
    else:
        time_text = start_time or ""
    if date and time_text:
        return f"{date} at {time_text}"
    return date or time_text or None


def match_when(notification: Notification) -> str | None:
    payload = notification.payload
    return format_when(payload_text(payload, "matchDate"), payload_text(payload, "startTime"))


def format_currency(minor_units: int | None, currency: str | None = None) -> str:
    """Format an amount given in minor units (cents) for display."""

    if minor_units is None:
        return ""
    code = (currency or DEFAULT_CURRENCY).upper()
    amount = Decimal(minor_units) / Decimal(100)
    sign = "-" if amount < 0 else ""
    formatted = f"{abs(amount):,.2f}"
    symbol = _CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{formatted} {code}"
    return f"{sign}{symbol}{formatted}"


def call_to_action_for(notification_type: NotificationType) -> CallToAction:
    return CALL_TO_ACTIONS.get(notification_type, DEFAULT_CALL_TO_ACTION)


__all__ = [
    "BOOKING_TYPES",
    "Branding",
    "CALL_TO_ACTIONS",
    "CHAT_TYPES",
    "CallToAction",
    "DEFAULT_ACCENT_COLOR",
    "FEEDBACK_TYPES",
    "PAYMENT_TYPES",
    "SPORT_COLORS",
    "SPORT_EMOJIS",
    "call_to_action_for",
    "escape_html",
    "format_currency",
    "format_when",
    "match_when",
    "payload_int",
    "payload_text",
    "sport_tag",
]
