"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

from datetime import datetime, timezone


def now_in_utc() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in UTC.

    Naive values are assumed to already be in UTC, which is how they are
    stored in the database.
    """

    if value is None:
        return None

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_naive_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` converted to UTC but without ``tzinfo``.

    SQLite ``DATETIME`` columns drop offsets silently, so values are stored as
    naive UTC and re-attached to UTC when read back.
    """

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)


def is_in_future(value: datetime | None, *, now: datetime | None = None) -> bool:
    """Return ``True`` when ``value`` is strictly later than ``now``."""

    if value is None:
        return False
    reference = ensure_utc(now) if now is not None else now_in_utc()
    return ensure_utc(value) > reference


def now_in_utc_naive() -> datetime:
    """Return the current UTC time without ``tzinfo`` for database defaults."""

    return now_in_utc().replace(tzinfo=None)
