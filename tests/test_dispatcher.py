"""Tests for the notification dispatcher using in-memory collaborators."""

from __future__ import annotations

from dataclasses import replace

import pytest
from sqlalchemy.exc import OperationalError

from app.application.formatters import EmailContent
from app.application.use_cases.delivery import (
    CONTACT_FETCH_FAILED_MESSAGE,
    ChannelTransports,
    NotificationDispatcher,
)
from app.domain.entities import (
    ContactInfo,
    DeliveryChannel,
    DeliveryResult,
    DeliveryStatus,
    NotificationPriority,
    NotificationType,
    OrganizationInfo,
)

from factories import PUSH_TOKEN, full_contact, make_notification

_DB_ERROR = OperationalError("SELECT 1", {}, Exception("database unavailable"))


class FakePreferences:
    def __init__(self, user=None, organization=None, error: Exception | None = None) -> None:
        self.user = user or {}
        self.organization = organization or {}
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def get_user_preferences(self, user_id, notification_type):
        self.calls.append(("user", user_id))
        if self.error is not None:
            raise self.error
        return dict(self.user.get(notification_type, {}))

    def get_organization_preferences(self, organization_id, notification_type):
        self.calls.append(("organization", organization_id))
        if self.error is not None:
            raise self.error
        return dict(self.organization.get(notification_type, {}))


class FakeContacts:
    def __init__(self, contact: ContactInfo | None = None, error: Exception | None = None) -> None:
        self.contact = contact
        self.error = error

    def get_contact_info(self, user_id):
        if self.error is not None:
            raise self.error
        return self.contact


class FakeOrganizations:
    def __init__(self, organizations=None, error: Exception | None = None) -> None:
        self.organizations = organizations or {}
        self.error = error

    def get(self, organization_id):
        if self.error is not None:
            raise self.error
        return self.organizations.get(organization_id)


class FakeAttempts:
    def __init__(self, fail_on: set[DeliveryChannel] | None = None) -> None:
        self.rows = []
        self.fail_on = fail_on or set()

    def create(self, attempt):
        if attempt.channel in self.fail_on:
            raise _DB_ERROR
        stored = replace(attempt, id=len(self.rows) + 1)
        self.rows.append(stored)
        return stored


class RecordingTransport:
    def __init__(self, result: DeliveryResult | None = None) -> None:
        self.result = result or DeliveryResult.success({"id": "ok"})
        self.calls: list[tuple] = []

    def send(self, *args):
        self.calls.append(args)
        return self.result


@pytest.fixture()
def transports() -> ChannelTransports:
    return ChannelTransports(
        email=RecordingTransport(),
        push=RecordingTransport(),
        sms=RecordingTransport(),
    )


def _dispatcher(transports, *, preferences=None, contacts=None, organizations=None, attempts=None):
    return NotificationDispatcher(
        preferences=preferences or FakePreferences(),
        contacts=contacts or FakeContacts(full_contact()),
        organizations=organizations or FakeOrganizations(),
        attempts=attempts or FakeAttempts(),
        transports=transports,
    )


def _statuses(report) -> list[tuple[int, DeliveryChannel, DeliveryStatus]]:
    return [(a.attempt_number, a.channel, a.status) for a in report.attempts]


def _status_for(report, channel: DeliveryChannel) -> DeliveryStatus:
    return next(a.status for a in report.attempts if a.channel is channel)


def test_defaults_drive_channels(transports) -> None:
    attempts = FakeAttempts()
    dispatcher = _dispatcher(transports, attempts=attempts)

    report = dispatcher.dispatch(make_notification(NotificationType.MATCH_INVITATION))

    assert _statuses(report) == [
        (1, DeliveryChannel.EMAIL, DeliveryStatus.SUCCESS),
        (2, DeliveryChannel.PUSH, DeliveryStatus.SUCCESS),
        (3, DeliveryChannel.SMS, DeliveryStatus.SKIPPED_PREFERENCE),
    ]
    assert len(attempts.rows) == 3
    recipient, content = transports.email.calls[0]
    assert recipient == "player@example.com"
    assert isinstance(content, EmailContent)
    assert transports.push.calls[0][0]["to"] == PUSH_TOKEN
    assert transports.sms.calls == []


def test_urgent_match_cancelled_attempts_every_channel(transports) -> None:
    transports.push.result = DeliveryResult.failure("DeviceNotRegistered")
    notification = make_notification(
        NotificationType.MATCH_CANCELLED,
        title="Match cancelled",
        priority=NotificationPriority.URGENT,
        payload={"sportName": "tennis", "matchDate": "Sat", "startTime": "6 PM"},
    )

    report = _dispatcher(transports).dispatch(notification)

    assert [a.status for a in report.attempts] == [
        DeliveryStatus.SUCCESS,
        DeliveryStatus.FAILED,
        DeliveryStatus.SUCCESS,
    ]
    assert report.attempts[1].error_message == "DeviceNotRegistered"
    phone, text = transports.sms.calls[0]
    assert phone == "+15145551234"
    assert text == "[tennis] CANCELLED: Match cancelled - Sat at 6 PM"


def test_explicit_preferences_override_defaults(transports) -> None:
    preferences = FakePreferences(
        user={
            NotificationType.MATCH_INVITATION: {
                DeliveryChannel.EMAIL: False,
                DeliveryChannel.SMS: True,
            }
        }
    )

    report = _dispatcher(transports, preferences=preferences).dispatch(make_notification())

    assert [a.status for a in report.attempts] == [
        DeliveryStatus.SKIPPED_PREFERENCE,
        DeliveryStatus.SUCCESS,
        DeliveryStatus.SUCCESS,
    ]
    assert preferences.calls == [("user", "user-1")]


def test_email_only_contact_skips_push_and_sms(transports) -> None:
    contact = ContactInfo(email="player@example.com", push_enabled=True)
    notification = make_notification(NotificationType.MATCH_CANCELLED)

    report = _dispatcher(transports, contacts=FakeContacts(contact)).dispatch(notification)

    email, push, sms = report.attempts
    assert email.status is DeliveryStatus.SUCCESS
    assert push.status is DeliveryStatus.SKIPPED_MISSING_CONTACT
    assert push.error_message == "No push token registered"
    assert sms.status is DeliveryStatus.SKIPPED_MISSING_CONTACT
    assert sms.error_message == "No phone number"
    assert transports.push.calls == []
    assert transports.sms.calls == []


def test_push_disabled_globally_reason(transports) -> None:
    contact = ContactInfo(email="player@example.com", push_enabled=False)

    report = _dispatcher(transports, contacts=FakeContacts(contact)).dispatch(
        make_notification(NotificationType.MATCH_CANCELLED)
    )

    assert _status_for(report, DeliveryChannel.PUSH) is DeliveryStatus.SKIPPED_MISSING_CONTACT
    assert report.attempts[1].error_message == "Push notifications disabled globally"


@pytest.mark.parametrize(
    "contacts",
    [FakeContacts(None), FakeContacts(error=_DB_ERROR)],
    ids=["missing-profile", "store-error"],
)
def test_contact_failure_fails_every_channel(transports, contacts) -> None:
    attempts = FakeAttempts()

    report = _dispatcher(transports, contacts=contacts, attempts=attempts).dispatch(
        make_notification(NotificationType.MATCH_CANCELLED)
    )

    assert _statuses(report) == [
        (1, DeliveryChannel.EMAIL, DeliveryStatus.FAILED),
        (2, DeliveryChannel.PUSH, DeliveryStatus.FAILED),
        (3, DeliveryChannel.SMS, DeliveryStatus.FAILED),
    ]
    assert {a.error_message for a in attempts.rows} == {CONTACT_FETCH_FAILED_MESSAGE}
    assert transports.email.calls == transports.push.calls == transports.sms.calls == []


def test_preference_store_error_falls_back_to_defaults(transports, caplog) -> None:
    preferences = FakePreferences(
        user={NotificationType.MATCH_INVITATION: {DeliveryChannel.EMAIL: False}},
        error=_DB_ERROR,
    )

    with caplog.at_level("ERROR"):
        report = _dispatcher(transports, preferences=preferences).dispatch(make_notification())

    assert _status_for(report, DeliveryChannel.EMAIL) is DeliveryStatus.SUCCESS
    assert _status_for(report, DeliveryChannel.SMS) is DeliveryStatus.SKIPPED_PREFERENCE
    assert "using defaults" in caplog.text


def test_organization_preferences_replace_user_preferences(transports) -> None:
    preferences = FakePreferences(
        user={NotificationType.BOOKING_CONFIRMED: {DeliveryChannel.PUSH: True}},
        organization={NotificationType.BOOKING_CONFIRMED: {DeliveryChannel.PUSH: False}},
    )
    organizations = FakeOrganizations(
        {"org-1": OrganizationInfo(id="org-1", name="Club Jarry")}
    )
    notification = make_notification(
        NotificationType.BOOKING_CONFIRMED,
        title="Booking confirmed",
        payload={"organizationId": "org-1", "courtName": "Court 1"},
    )

    report = _dispatcher(
        transports, preferences=preferences, organizations=organizations
    ).dispatch(notification)

    assert report.organization_id == "org-1"
    assert _status_for(report, DeliveryChannel.PUSH) is DeliveryStatus.SKIPPED_PREFERENCE
    assert preferences.calls == [("organization", "org-1")]
    _, content = transports.email.calls[0]
    assert content.subject == "[Club Jarry] Booking confirmed"


def test_organization_id_ignored_for_personal_types(transports) -> None:
    preferences = FakePreferences()
    notification = make_notification(
        NotificationType.MATCH_INVITATION, payload={"organizationId": "org-1"}
    )

    report = _dispatcher(transports, preferences=preferences).dispatch(notification)

    assert report.organization_id is None
    assert preferences.calls == [("user", "user-1")]


def test_missing_organization_uses_personal_email(transports) -> None:
    notification = make_notification(
        NotificationType.BOOKING_CONFIRMED,
        title="Booking confirmed",
        payload={"organizationId": "org-404"},
    )

    _dispatcher(transports, organizations=FakeOrganizations(error=_DB_ERROR)).dispatch(
        notification
    )

    _, content = transports.email.calls[0]
    assert content.subject == "Booking confirmed"


def test_transport_failures_are_recorded_not_raised(transports) -> None:
    transports.email.result = DeliveryResult.failure(
        "Email provider not configured"
    )

    report = _dispatcher(transports).dispatch(make_notification())

    assert report.attempts[0].status is DeliveryStatus.FAILED
    assert report.attempts[0].error_message == "Email provider not configured"
    assert report.delivered_channels == [DeliveryChannel.PUSH]


def test_attempt_write_failure_does_not_stop_other_channels(transports, caplog) -> None:
    attempts = FakeAttempts(fail_on={DeliveryChannel.EMAIL})

    with caplog.at_level("ERROR"):
        report = _dispatcher(transports, attempts=attempts).dispatch(make_notification())

    assert len(report.attempts) == 3
    assert [row.channel for row in attempts.rows] == [DeliveryChannel.PUSH, DeliveryChannel.SMS]
    assert "Failed to record email attempt" in caplog.text


def test_repeated_dispatch_writes_independent_attempt_sets(transports) -> None:
    attempts = FakeAttempts()
    dispatcher = _dispatcher(transports, attempts=attempts)
    notification = make_notification()

    dispatcher.dispatch(notification)
    dispatcher.dispatch(notification)

    assert [row.attempt_number for row in attempts.rows] == [1, 2, 3, 1, 2, 3]
    assert len(transports.email.calls) == 2
