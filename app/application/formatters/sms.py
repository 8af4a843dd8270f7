"""Compose single-segment SMS text for notifications."""

from __future__ import annotations

from typing import Final

from app.domain.entities import Notification, NotificationPriority, NotificationType

from .common import Branding, match_when, payload_text, sport_tag

SMS_MAX_LENGTH: Final[int] = 160
MIN_EXTRA_LENGTH: Final[int] = 10
ELLIPSIS: Final[str] = "..."
EXTRA_SEPARATOR: Final[str] = " - "


def _squash(text: str) -> str:
    return " ".join(text.split())


def truncate(text: str, limit: int = SMS_MAX_LENGTH) -> str:
    """Cut ``text`` to ``limit`` characters, ending in an ellipsis when cut."""

    if len(text) <= limit:
        return text
    if limit <= len(ELLIPSIS):
        return text[:limit]
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def sms_content(notification: Notification) -> tuple[str, str | None]:
    """Return the core sentence and an optional extra fact for ``notification``."""

    payload = notification.payload
    title = notification.title
    notification_type = notification.type
    when = match_when(notification)
    location = payload_text(payload, "locationName")

    if notification.priority is NotificationPriority.URGENT:
        if notification_type is NotificationType.MATCH_STARTING_SOON:
            return f"STARTING SOON: {title}", location
        if notification_type is NotificationType.MATCH_CANCELLED:
            return f"CANCELLED: {title}", when

    if notification_type is NotificationType.MATCH_INVITATION:
        player = payload_text(payload, "playerName")
        lead = f"Game invite from {player}" if player else "New game invite"
        return lead, when
    if notification_type is NotificationType.MATCH_JOIN_ACCEPTED:
        return "You're in!", when
    if notification_type is NotificationType.MATCH_STARTING_SOON:
        return "Your game starts soon", location
    if notification_type is NotificationType.REMINDER:
        return f"Reminder: {title}", when

    if notification.body:
        return f"{title}: {notification.body}", None
    return title, None


def format_sms(notification: Notification, branding: Branding | None = None) -> str:
    """Return SMS text for ``notification`` that never exceeds 160 characters."""

    branding = branding or Branding()
    sport = sport_tag(notification)
    prefix = f"[{sport}] " if sport else f"{branding.app_name}: "

    core, extra = sms_content(notification)
    message = prefix + _squash(core)

    if extra:
        extra = _squash(extra)
        combined = f"{message}{EXTRA_SEPARATOR}{extra}"
        if len(combined) <= SMS_MAX_LENGTH:
            message = combined
        else:
            room = SMS_MAX_LENGTH - len(message) - len(EXTRA_SEPARATOR) - len(ELLIPSIS)
            if room >= MIN_EXTRA_LENGTH:
                message = f"{message}{EXTRA_SEPARATOR}{extra[:room]}{ELLIPSIS}"

    return truncate(message, SMS_MAX_LENGTH)


__all__ = [
    "ELLIPSIS",
    "MIN_EXTRA_LENGTH",
    "SMS_MAX_LENGTH",
    "format_sms",
    "sms_content",
    "truncate",
]
