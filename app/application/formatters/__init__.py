"""Pure content formatters for each delivery channel."""

from .common import Branding
from .email import EmailContent, render_email, render_organization_email
from .push import build_push_message
from .sms import SMS_MAX_LENGTH, format_sms

__all__ = [
    "Branding",
    "EmailContent",
    "SMS_MAX_LENGTH",
    "build_push_message",
    "format_sms",
    "render_email",
    "render_organization_email",
]
