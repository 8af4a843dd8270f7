"""Build Expo push messages for notifications."""

from __future__ import annotations

from typing import Any, Final

from app.domain.entities import (
    Notification,
    NotificationCategory,
    NotificationPriority,
    NotificationType,
)

from .common import CHAT_TYPES, FEEDBACK_TYPES, SPORT_EMOJIS, sport_tag

URGENT_TTL_SECONDS: Final[int] = 60 * 60
DEFAULT_TTL_SECONDS: Final[int] = 24 * 60 * 60

# iOS notification categories registered by the mobile app.
ACTION_CATEGORIES: Final[dict[NotificationType, str]] = {
    NotificationType.MATCH_INVITATION: "match_invitation",
    NotificationType.MATCH_JOIN_REQUEST: "match_invitation",
    NotificationType.FEEDBACK_REQUEST: "feedback_request",
    NotificationType.NEW_MESSAGE: "message",
    NotificationType.CHAT: "message",
}

_EMOJI_TYPES: Final[frozenset[NotificationType]] = frozenset(
    {NotificationType.REMINDER, *FEEDBACK_TYPES}
)
_HIGH_PRIORITIES = frozenset({NotificationPriority.HIGH, NotificationPriority.URGENT})


def push_title(notification: Notification) -> str:
    """Return the title, prefixed with the sport emoji where it applies."""

    eligible = (
        notification.category is NotificationCategory.MATCH
        or notification.type in _EMOJI_TYPES
    )
    emoji = SPORT_EMOJIS.get(sport_tag(notification) or "") if eligible else None
    if emoji:
        return f"{emoji} {notification.title}"
    return notification.title


def android_channel_id(notification: Notification) -> str:
    """Select the Android notification channel for ``notification``."""

    if notification.type in CHAT_TYPES:
        return "messages"
    if notification.type in FEEDBACK_TYPES:
        return "feedback"
    category = notification.category
    if category is NotificationCategory.MATCH:
        if notification.priority is NotificationPriority.URGENT:
            return "match-urgent"
        return "matches"
    if category is NotificationCategory.ORGANIZATION:
        return "organization"
    return "default"


def build_push_message(notification: Notification, push_token: str) -> dict[str, Any]:
    """Return the Expo push message delivering ``notification`` to ``push_token``."""

    data: dict[str, Any] = dict(notification.payload or {})
    data.update(
        {
            "notificationId": notification.id,
            "type": notification.type.value,
            "targetId": notification.target_id,
        }
    )

    message: dict[str, Any] = {
        "to": push_token,
        "title": push_title(notification),
        "body": notification.body or "",
        "data": data,
        "sound": "default",
        "channelId": android_channel_id(notification),
        "priority": "high" if notification.priority in _HIGH_PRIORITIES else "normal",
        "ttl": (
            URGENT_TTL_SECONDS
            if notification.priority is NotificationPriority.URGENT
            else DEFAULT_TTL_SECONDS
        ),
    }
    category_id = ACTION_CATEGORIES.get(notification.type)
    if category_id:
        message["categoryId"] = category_id
    return message


__all__ = [
    "ACTION_CATEGORIES",
    "DEFAULT_TTL_SECONDS",
    "URGENT_TTL_SECONDS",
    "android_channel_id",
    "build_push_message",
    "push_title",
]
