"""Provider-backed transports, one per delivery channel."""

from .email import EmailTransport
from .push import PushTransport, is_expo_push_token
from .sms import SmsTransport

__all__ = ["EmailTransport", "PushTransport", "SmsTransport", "is_expo_push_token"]
