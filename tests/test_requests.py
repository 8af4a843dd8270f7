"""Tests for unwrapping inbound dispatch requests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.application.use_cases.delivery import (
    InvalidDispatchRequest,
    is_scheduled_for_later,
    unwrap_notification_record,
)

from factories import make_notification

RECORD = {"id": "n-1", "user_id": "u-1", "type": "chat", "title": "Hi"}


def test_unwraps_trigger_envelope() -> None:
    envelope = {"type": "INSERT", "table": "notification", "record": RECORD, "schema": "public"}

    assert unwrap_notification_record(envelope) == RECORD


def test_accepts_direct_notification() -> None:
    assert unwrap_notification_record(RECORD) == RECORD


def test_rejects_envelope_for_other_table() -> None:
    with pytest.raises(InvalidDispatchRequest):
        unwrap_notification_record({"type": "INSERT", "table": "match", "record": RECORD})


@pytest.mark.parametrize("event", ["UPDATE", "DELETE", None])
def test_rejects_envelope_for_non_insert_events(event) -> None:
    envelope = {"type": event, "table": "notification", "record": RECORD, "old_record": RECORD}

    with pytest.raises(InvalidDispatchRequest):
        unwrap_notification_record(envelope)


@pytest.mark.parametrize(
    "body",
    [
        None,
        [],
        "notification",
        {"id": "n-1", "user_id": "u-1"},
        {"record": {"id": "n-1", "type": "chat"}},
        {"foo": "bar"},
    ],
)
def test_rejects_malformed_bodies(body) -> None:
    with pytest.raises(InvalidDispatchRequest, match="Invalid request format"):
        unwrap_notification_record(body)


def test_scheduled_for_later() -> None:
    now = datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc)
    future = make_notification(scheduled_at=now + timedelta(hours=1))
    past = make_notification(scheduled_at=now - timedelta(minutes=5))

    assert is_scheduled_for_later(future, now=now) is True
    assert is_scheduled_for_later(past, now=now) is False
    assert is_scheduled_for_later(make_notification(), now=now) is False


def test_naive_schedule_is_treated_as_utc() -> None:
    now = datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc)
    notification = make_notification(scheduled_at=datetime(2025, 5, 1, 12, 30))

    assert is_scheduled_for_later(notification, now=now) is True
