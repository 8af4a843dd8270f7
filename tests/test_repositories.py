"""Tests for the SQLAlchemy repositories."""

from __future__ import annotations

from datetime import datetime, timezone

from app.domain.entities import (
    DeliveryAttempt,
    DeliveryChannel,
    DeliveryStatus,
    NotificationPriority,
    NotificationType,
    PreferenceScope,
)
from app.infrastructure.models import (
    OrganizationModel,
    PlayerModel,
    ProfileModel,
)
from app.infrastructure.repositories import (
    ContactRepository,
    DeliveryAttemptRepository,
    NotificationRepository,
    OrganizationRepository,
    PreferenceRepository,
)

from factories import make_notification


def test_notification_round_trip(db_session) -> None:
    repository = NotificationRepository(db_session)
    scheduled = datetime(2025, 6, 1, 18, 30, tzinfo=timezone.utc)

    repository.create(
        make_notification(
            NotificationType.MATCH_STARTING_SOON,
            priority=NotificationPriority.URGENT,
            payload={"sportName": "padel"},
            scheduled_at=scheduled,
        )
    )
    stored = repository.get("notif-1")

    assert stored is not None
    assert stored.type is NotificationType.MATCH_STARTING_SOON
    assert stored.priority is NotificationPriority.URGENT
    assert stored.payload == {"sportName": "padel"}
    assert stored.scheduled_at == scheduled
    assert stored.created_at is not None
    assert repository.get("missing") is None


def test_contact_info_combines_profile_and_player(db_session) -> None:
    db_session.add_all(
        [
            ProfileModel(id="user-1", email="a@example.com", phone="+15145551234", phone_verified=True),
            PlayerModel(id="user-1", expo_push_token="ExpoPushToken[x]", push_notifications_enabled=True),
            ProfileModel(id="user-2", email="b@example.com"),
        ]
    )
    db_session.commit()
    repository = ContactRepository(db_session)

    full = repository.get_contact_info("user-1")
    without_player = repository.get_contact_info("user-2")

    assert full.email == "a@example.com"
    assert full.phone_verified is True
    assert full.push_token == "ExpoPushToken[x]"
    assert full.push_enabled is True
    assert without_player.push_token is None
    assert without_player.push_enabled is False
    assert without_player.phone_verified is False
    assert repository.get_contact_info("nobody") is None


def test_preferences_are_scoped_and_upserted(db_session) -> None:
    repository = PreferenceRepository(db_session)

    repository.set_user_preference("user-1", NotificationType.CHAT, DeliveryChannel.PUSH, True)
    repository.set_user_preference("user-1", NotificationType.CHAT, DeliveryChannel.PUSH, False)
    repository.set_user_preference("user-1", NotificationType.CHAT, DeliveryChannel.SMS, True)
    repository.set_organization_preference(
        "org-1", NotificationType.BOOKING_CONFIRMED, DeliveryChannel.PUSH, False
    )

    assert repository.get_user_preferences("user-1", NotificationType.CHAT) == {
        DeliveryChannel.PUSH: False,
        DeliveryChannel.SMS: True,
    }
    assert repository.get_user_preferences("user-1", NotificationType.REMINDER) == {}
    assert repository.get_organization_preferences(
        "org-1", NotificationType.BOOKING_CONFIRMED
    ) == {DeliveryChannel.PUSH: False}
    assert repository.get_user_preferences("org-1", NotificationType.BOOKING_CONFIRMED) == {}

    listed = repository.list_user_preferences("user-1")
    assert len(listed) == 2
    assert all(row.scope is PreferenceScope.USER for row in listed)
    assert repository.list_organization_preferences("org-1")[0].scope is PreferenceScope.ORGANIZATION


def test_organization_lookup(db_session) -> None:
    db_session.add(OrganizationModel(id="org-1", name="Club", website="https://club.example.com"))
    db_session.commit()
    repository = OrganizationRepository(db_session)

    organization = repository.get("org-1")

    assert organization.name == "Club"
    assert organization.website == "https://club.example.com"
    assert repository.get("org-2") is None


def test_delivery_attempts_are_appended_and_listed_in_order(db_session) -> None:
    NotificationRepository(db_session).create(make_notification())
    repository = DeliveryAttemptRepository(db_session)

    for number, channel in enumerate(DeliveryChannel, start=1):
        repository.create(
            DeliveryAttempt(
                id=None,
                notification_id="notif-1",
                attempt_number=number,
                channel=channel,
                status=DeliveryStatus.FAILED,
                error_message="boom",
                provider_response={"status_code": 500},
            )
        )

    attempts = repository.list_for_notification("notif-1")

    assert [a.attempt_number for a in attempts] == [1, 2, 3]
    assert [a.channel for a in attempts] == list(DeliveryChannel)
    assert attempts[0].id is not None
    assert attempts[0].provider_response == {"status_code": 500}
    assert attempts[0].created_at.tzinfo is not None
    assert repository.list_for_notification("other") == []
