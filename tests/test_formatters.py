"""Tests for the email, push and SMS content formatters."""

from __future__ import annotations

import pytest

from app.application.formatters import (
    Branding,
    build_push_message,
    format_sms,
    render_email,
    render_organization_email,
)
from app.application.formatters.common import format_currency, format_when
from app.application.formatters.email import detail_rows, email_subject
from app.domain.entities import NotificationPriority, NotificationType, OrganizationInfo

from factories import PUSH_TOKEN, make_notification

MATCH_PAYLOAD = {
    "sportName": "Tennis",
    "matchDate": "Sat, May 3",
    "startTime": "6:00 PM",
    "locationName": "Jarry Park",
    "playerName": "Alex",
}

ORGANIZATION = OrganizationInfo(
    id="org-1", name="Club Montréal", email="club@example.com", website="https://club.example.com"
)


# Email --------------------------------------------------------------------


def test_match_email_subject_includes_sport() -> None:
    notification = make_notification(payload=MATCH_PAYLOAD)

    assert email_subject(notification) == "[tennis] Game tonight"


def test_email_subject_without_sport_is_title() -> None:
    notification = make_notification(NotificationType.SYSTEM, title="Maintenance")

    assert email_subject(notification) == "Maintenance"


def test_render_email_contains_details_and_call_to_action() -> None:
    notification = make_notification(payload=MATCH_PAYLOAD)

    content = render_email(notification)

    assert "View Invitation" in content.html
    assert "rallia://match/match-42" in content.html
    assert "Jarry Park" in content.html
    assert "Sat, May 3 at 6:00 PM" in content.html
    assert "#C5D93D" in content.html
    assert "rallia://settings/notifications" in content.html


def test_render_email_escapes_user_content() -> None:
    notification = make_notification(
        NotificationType.NEW_MESSAGE,
        title="<script>alert(1)</script>",
        body='Tom & "Jerry"',
    )

    html = render_email(notification).html

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "Tom &amp; &quot;Jerry&quot;" in html


def test_call_to_action_falls_back_without_target() -> None:
    notification = make_notification(target_id=None)

    html = render_email(notification, Branding(deep_link_scheme="app://")).html

    assert "app://notifications" in html


def test_organization_email_for_booking() -> None:
    notification = make_notification(
        NotificationType.BOOKING_CONFIRMED,
        title="Booking confirmed",
        body="See you on court",
        payload={
            "organizationId": "org-1",
            "courtName": "Court 3",
            "facilityName": "Centre Claude-Robillard",
            "bookingDate": "2025-05-03",
            "startTime": "18:00",
            "endTime": "19:00",
            "priceCents": 2550,
        },
    )

    content = render_organization_email(notification, ORGANIZATION)

    assert content.subject == "[Club Montréal] Booking confirmed"
    assert "Court 3" in content.html
    assert "2025-05-03 at 18:00 - 19:00" in content.html
    assert "$25.50" in content.html
    assert "#4DB8A8" in content.html
    assert "https://club.example.com" in content.html
    assert "Powered by Rallia" in content.html


def test_organization_email_for_member_has_no_details_card() -> None:
    notification = make_notification(
        NotificationType.NEW_MEMBER_JOINED,
        title="New member",
        payload={"organizationId": "org-1", "playerName": "Sam"},
    )

    content = render_organization_email(notification, ORGANIZATION)

    assert "#2196F3" in content.html
    assert "Sam" not in content.html


def test_payment_rows_highlight_failure_reason() -> None:
    notification = make_notification(
        NotificationType.PAYMENT_FAILED,
        payload={"amountCents": 1000, "currency": "eur", "failureReason": "Card declined"},
    )

    rows = detail_rows(notification)

    assert [row.label for row in rows] == ["Amount", "Reason"]
    assert rows[0].value == "€10.00"
    assert rows[1].color is not None


def test_format_currency_unknown_code() -> None:
    assert format_currency(123456, "JPY") == "1,234.56 JPY"


def test_format_when_variants() -> None:
    assert format_when("Mon", "9:00", "10:00") == "Mon at 9:00 - 10:00"
    assert format_when(None, "9:00") == "9:00"
    assert format_when(None, None) is None


# Push ---------------------------------------------------------------------


def test_push_message_for_urgent_match() -> None:
    notification = make_notification(
        NotificationType.MATCH_CANCELLED,
        title="Match cancelled",
        payload=MATCH_PAYLOAD,
        priority=NotificationPriority.URGENT,
    )

    message = build_push_message(notification, PUSH_TOKEN)

    assert message["to"] == PUSH_TOKEN
    assert message["title"] == "\U0001F3BE Match cancelled"
    assert message["channelId"] == "match-urgent"
    assert message["priority"] == "high"
    assert message["ttl"] == 3600
    assert message["data"]["notificationId"] == "notif-1"
    assert message["data"]["type"] == "match_cancelled"
    assert message["data"]["targetId"] == "match-42"
    assert message["data"]["locationName"] == "Jarry Park"
    assert "categoryId" not in message


def test_push_message_categories_and_channels() -> None:
    invitation = build_push_message(make_notification(), PUSH_TOKEN)
    chat = build_push_message(make_notification(NotificationType.NEW_MESSAGE), PUSH_TOKEN)
    feedback = build_push_message(make_notification(NotificationType.FEEDBACK_REQUEST), PUSH_TOKEN)
    booking = build_push_message(make_notification(NotificationType.BOOKING_CREATED), PUSH_TOKEN)
    support = build_push_message(make_notification(NotificationType.SUPPORT), PUSH_TOKEN)

    assert invitation["categoryId"] == "match_invitation"
    assert invitation["channelId"] == "matches"
    assert invitation["priority"] == "normal"
    assert invitation["ttl"] == 86400
    assert chat["categoryId"] == "message"
    assert chat["channelId"] == "messages"
    assert feedback["categoryId"] == "feedback_request"
    assert feedback["channelId"] == "feedback"
    assert booking["channelId"] == "organization"
    assert support["channelId"] == "default"


def test_push_title_without_sport_has_no_emoji() -> None:
    message = build_push_message(make_notification(), PUSH_TOKEN)

    assert message["title"] == "Game tonight"


# SMS ----------------------------------------------------------------------


def test_sms_with_long_title_is_truncated_to_limit() -> None:
    notification = make_notification(NotificationType.SYSTEM, title="x" * 200, body=None)

    text = format_sms(notification)

    assert text.startswith("Rallia: ")
    assert len(text) == 160
    assert text.endswith("...")


def test_sms_invitation_includes_player_and_time() -> None:
    text = format_sms(make_notification(payload=MATCH_PAYLOAD))

    assert text == "[tennis] Game invite from Alex - Sat, May 3 at 6:00 PM"


def test_sms_urgent_starting_soon_uses_location() -> None:
    notification = make_notification(
        NotificationType.MATCH_STARTING_SOON,
        title="Doubles at 6",
        payload=MATCH_PAYLOAD,
        priority=NotificationPriority.URGENT,
    )

    assert format_sms(notification) == "[tennis] STARTING SOON: Doubles at 6 - Jarry Park"


def test_sms_fallback_uses_title_and_body() -> None:
    notification = make_notification(
        NotificationType.PAYMENT, title="Payment received", body="Thanks!"
    )

    assert format_sms(notification) == "Rallia: Payment received: Thanks!"


def test_sms_truncates_extra_when_room_remains() -> None:
    notification = make_notification(
        NotificationType.REMINDER,
        title="r" * 100,
        payload={"matchDate": "d" * 80, "startTime": "7 PM"},
    )

    text = format_sms(notification)

    assert len(text) == 160
    assert text.endswith("...")
    assert " - ddd" in text


def test_sms_drops_extra_when_too_little_room() -> None:
    notification = make_notification(
        NotificationType.REMINDER,
        title="r" * 140,
        payload={"matchDate": "Saturday, May 3", "startTime": "7 PM"},
    )

    text = format_sms(notification)

    assert text == "Rallia: Reminder: " + "r" * 140
    assert len(text) <= 160


@pytest.mark.parametrize("notification_type", list(NotificationType))
@pytest.mark.parametrize("priority", list(NotificationPriority))
def test_sms_never_exceeds_limit(notification_type, priority) -> None:
    notification = make_notification(
        notification_type,
        title="T" * 300,
        body="B" * 300,
        priority=priority,
        payload={
            "sportName": "pickleball" * 5,
            "matchDate": "D" * 200,
            "startTime": "S" * 50,
            "locationName": "L" * 200,
            "playerName": "P" * 100,
        },
    )

    assert len(format_sms(notification)) <= 160
