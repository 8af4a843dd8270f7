"""Fan a notification out to its enabled channels and audit every attempt."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.formatters import (
    Branding,
    build_push_message,
    format_sms,
    render_email,
    render_organization_email,
)
from app.config import Settings
from app.domain.entities import (
    CHANNEL_ORDER,
    ContactInfo,
    DeliveryAttempt,
    DeliveryChannel,
    DeliveryResult,
    DeliveryStatus,
    Notification,
    OrganizationInfo,
    is_organization_notification,
)
from app.infrastructure.repositories import (
    ContactRepository,
    DeliveryAttemptRepository,
    OrganizationRepository,
    PreferenceRepository,
)
from app.infrastructure.transports import EmailTransport, PushTransport, SmsTransport

from .contacts import normalize_phone_number, validate_contact
from .preferences import resolve_enabled_channels

logger = logging.getLogger(__name__)

CONTACT_FETCH_FAILED_MESSAGE = "Could not retrieve user contact info"


@dataclass
class ChannelTransports:
    """One transport per delivery channel."""

    email: EmailTransport
    push: PushTransport
    sms: SmsTransport

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChannelTransports":
        return cls(
            email=EmailTransport.from_settings(settings),
            push=PushTransport.from_settings(settings),
            sms=SmsTransport.from_settings(settings),
        )


@dataclass
class DispatchReport:
    """Outcome of a single dispatch invocation."""

    notification_id: str
    organization_id: str | None = None
    attempts: list[DeliveryAttempt] = field(default_factory=list)

    @property
    def delivered_channels(self) -> list[DeliveryChannel]:
        return [
            attempt.channel
            for attempt in self.attempts
            if attempt.status is DeliveryStatus.SUCCESS
        ]


class NotificationDispatcher:
    """Deliver one notification over email, push and SMS in that order.

    Every invocation writes exactly one audit row per channel, numbered 1 to 3
    in channel order. Dispatching the same notification twice writes a second,
    independent set of rows.
    """

    def __init__(
        self,
        *,
        preferences: PreferenceRepository,
        contacts: ContactRepository,
        organizations: OrganizationRepository,
        attempts: DeliveryAttemptRepository,
        transports: ChannelTransports,
        branding: Branding | None = None,
    ) -> None:
        self.preferences = preferences
        self.contacts = contacts
        self.organizations = organizations
        self.attempts = attempts
        self.transports = transports
        self.branding = branding or Branding()

    @classmethod
    def from_session(
        cls,
        session: Session,
        transports: ChannelTransports,
        branding: Branding | None = None,
    ) -> "NotificationDispatcher":
        return cls(
            preferences=PreferenceRepository(session),
            contacts=ContactRepository(session),
            organizations=OrganizationRepository(session),
            attempts=DeliveryAttemptRepository(session),
            transports=transports,
            branding=branding,
        )

    def dispatch(self, notification: Notification) -> DispatchReport:
        organization_id = (
            notification.organization_id
            if is_organization_notification(notification.type)
            else None
        )
        report = DispatchReport(notification_id=notification.id, organization_id=organization_id)

        organization: OrganizationInfo | None = None
        if organization_id:
            organization = self._load_organization(organization_id)
            explicit = self._load_preferences(
                lambda: self.preferences.get_organization_preferences(
                    organization_id, notification.type
                ),
                f"organization {organization_id}",
            )
        else:
            explicit = self._load_preferences(
                lambda: self.preferences.get_user_preferences(
                    notification.user_id, notification.type
                ),
                f"user {notification.user_id}",
            )
        enabled_channels = resolve_enabled_channels(explicit, notification.type)

        contact = self._load_contact(notification.user_id)
        if contact is None:
            logger.error(
                "Could not get contact info for user %s; failing all channels for %s",
                notification.user_id,
                notification.id,
            )
            for attempt_number, channel in enumerate(CHANNEL_ORDER, start=1):
                report.attempts.append(
                    self._record(
                        notification,
                        attempt_number,
                        channel,
                        DeliveryResult.failure(CONTACT_FETCH_FAILED_MESSAGE),
                    )
                )
            return report

        for attempt_number, channel in enumerate(CHANNEL_ORDER, start=1):
            if channel not in enabled_channels:
                logger.info(
                    "Skipping %s for notification %s: disabled by preference",
                    channel.value,
                    notification.id,
                )
                result = DeliveryResult(status=DeliveryStatus.SKIPPED_PREFERENCE)
            else:
                check = validate_contact(channel, contact)
                if not check.valid:
                    logger.info(
                        "Skipping %s for notification %s: %s",
                        channel.value,
                        notification.id,
                        check.reason,
                    )
                    result = DeliveryResult(
                        status=DeliveryStatus.SKIPPED_MISSING_CONTACT,
                        error_message=check.reason,
                    )
                else:
                    result = self._deliver(channel, notification, contact, organization)
            report.attempts.append(self._record(notification, attempt_number, channel, result))

        logger.info(
            "Dispatched notification %s (delivered: %s)",
            notification.id,
            ", ".join(channel.value for channel in report.delivered_channels) or "none",
        )
        return report

    def _load_preferences(
        self,
        loader: Callable[[], Mapping[DeliveryChannel, bool]],
        owner: str,
    ) -> Mapping[DeliveryChannel, bool]:
        try:
            return loader()
        except SQLAlchemyError:
            logger.exception("Failed to fetch preferences for %s; using defaults", owner)
            return {}

    def _load_organization(self, organization_id: str) -> OrganizationInfo | None:
        try:
            organization = self.organizations.get(organization_id)
        except SQLAlchemyError:
            logger.exception("Failed to fetch organization %s", organization_id)
            return None
        if organization is None:
            logger.warning("Organization %s not found; using personal template", organization_id)
        return organization

    def _load_contact(self, user_id: str) -> ContactInfo | None:
        try:
            return self.contacts.get_contact_info(user_id)
        except SQLAlchemyError:
            logger.exception("Failed to fetch contact info for user %s", user_id)
            return None

    def _deliver(
        self,
        channel: DeliveryChannel,
        notification: Notification,
        contact: ContactInfo,
        organization: OrganizationInfo | None,
    ) -> DeliveryResult:
        if channel is DeliveryChannel.EMAIL:
            if organization is not None:
                content = render_organization_email(notification, organization, self.branding)
            else:
                content = render_email(notification, self.branding)
            return self.transports.email.send(contact.email, content)

        if channel is DeliveryChannel.PUSH:
            message = build_push_message(notification, contact.push_token)
            return self.transports.push.send(message)

        text = format_sms(notification, self.branding)
        return self.transports.sms.send(normalize_phone_number(contact.phone), text)

    def _record(
        self,
        notification: Notification,
        attempt_number: int,
        channel: DeliveryChannel,
        result: DeliveryResult,
    ) -> DeliveryAttempt:
        attempt = DeliveryAttempt(
            id=None,
            notification_id=notification.id,
            attempt_number=attempt_number,
            channel=channel,
            status=result.status,
            error_message=result.error_message,
            provider_response=result.provider_response,
        )
        try:
            return self.attempts.create(attempt)
        except SQLAlchemyError:
            logger.exception(
                "Failed to record %s attempt for notification %s", channel.value, notification.id
            )
            return attempt


__all__ = [
    "CONTACT_FETCH_FAILED_MESSAGE",
    "ChannelTransports",
    "DispatchReport",
    "NotificationDispatcher",
]
