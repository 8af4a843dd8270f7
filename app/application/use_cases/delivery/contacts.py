"""Validation of recipient contact details per delivery channel."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from app.domain.entities import ContactInfo, DeliveryChannel

_PHONE_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"[\s\-()]")
_E164_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\+[1-9]\d{6,14}$")

NO_EMAIL_REASON = "No email address"
PUSH_DISABLED_REASON = "Push notifications disabled globally"
NO_PUSH_TOKEN_REASON = "No push token registered"
NO_PHONE_REASON = "No phone number"
PHONE_NOT_VERIFIED_REASON = "Phone number not verified"
INVALID_PHONE_REASON = "Invalid phone number format"


@dataclass(frozen=True)
class ContactCheck:
    """Result of checking one channel against a contact snapshot."""

    valid: bool
    reason: str | None = None


def normalize_phone_number(phone: str) -> str:
    """Strip spaces, hyphens and parentheses from ``phone``."""

    return _PHONE_SEPARATORS.sub("", phone.strip())


def is_valid_phone_number(phone: str | None) -> bool:
    """Return whether ``phone`` looks like an E.164 number once normalized."""

    if not phone:
        return False
    return bool(_E164_PATTERN.match(normalize_phone_number(phone)))


def validate_contact(channel: DeliveryChannel, contact: ContactInfo) -> ContactCheck:
    """Return whether ``contact`` can be reached on ``channel``.

    SMS additionally requires a verified number since an unverified one may
    belong to someone else.
    """

    if channel is DeliveryChannel.EMAIL:
        if not contact.email:
            return ContactCheck(valid=False, reason=NO_EMAIL_REASON)
        return ContactCheck(valid=True)

    if channel is DeliveryChannel.PUSH:
        if not contact.push_enabled:
            return ContactCheck(valid=False, reason=PUSH_DISABLED_REASON)
        if not contact.push_token:
            return ContactCheck(valid=False, reason=NO_PUSH_TOKEN_REASON)
        return ContactCheck(valid=True)

    if channel is DeliveryChannel.SMS:
        if not contact.phone:
            return ContactCheck(valid=False, reason=NO_PHONE_REASON)
        if not contact.phone_verified:
            return ContactCheck(valid=False, reason=PHONE_NOT_VERIFIED_REASON)
        if not is_valid_phone_number(contact.phone):
            return ContactCheck(valid=False, reason=INVALID_PHONE_REASON)
        return ContactCheck(valid=True)

    return ContactCheck(valid=False, reason="Unknown channel")


__all__ = [
    "ContactCheck",
    "INVALID_PHONE_REASON",
    "NO_EMAIL_REASON",
    "NO_PHONE_REASON",
    "NO_PUSH_TOKEN_REASON",
    "PHONE_NOT_VERIFIED_REASON",
    "PUSH_DISABLED_REASON",
    "is_valid_phone_number",
    "normalize_phone_number",
    "validate_contact",
]
