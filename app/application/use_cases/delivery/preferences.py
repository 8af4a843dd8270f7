"""Resolve which delivery channels are enabled for a notification."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from app.domain.entities import (
    CHANNEL_ORDER,
    DEFAULT_CHANNEL_PREFERENCES,
    ChannelPreference,
    DeliveryChannel,
    NotificationType,
    PreferenceSource,
    ResolvedPreference,
)


def resolve_enabled_channels(
    explicit: Mapping[DeliveryChannel, bool],
    notification_type: NotificationType,
) -> set[DeliveryChannel]:
    """Return the channels enabled for ``notification_type``.

    An explicit value for a channel always wins, including an explicit
    ``False`` over a ``True`` default. Channels without an explicit value
    fall back to :data:`DEFAULT_CHANNEL_PREFERENCES`. The caller decides
    whether ``explicit`` holds user or organization preferences.
    """

    defaults = DEFAULT_CHANNEL_PREFERENCES[notification_type]
    enabled: set[DeliveryChannel] = set()
    for channel in CHANNEL_ORDER:
        if channel in explicit:
            if explicit[channel]:
                enabled.add(channel)
        elif defaults[channel]:
            enabled.add(channel)
    return enabled


def resolve_preferences(
    explicit_rows: Iterable[ChannelPreference],
) -> list[ResolvedPreference]:
    """Return the full type x channel matrix with the source of each value."""

    explicit_lookup = {
        (row.notification_type, row.channel): row.enabled for row in explicit_rows
    }

    resolved: list[ResolvedPreference] = []
    for notification_type, defaults in DEFAULT_CHANNEL_PREFERENCES.items():
        for channel in CHANNEL_ORDER:
            key = (notification_type, channel)
            if key in explicit_lookup:
                enabled = explicit_lookup[key]
                source = PreferenceSource.EXPLICIT
            else:
                enabled = defaults[channel]
                source = PreferenceSource.DEFAULT
            resolved.append(
                ResolvedPreference(
                    notification_type=notification_type,
                    channel=channel,
                    enabled=enabled,
                    source=source,
                )
            )
    return resolved


__all__ = ["resolve_enabled_channels", "resolve_preferences"]
