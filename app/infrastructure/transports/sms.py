"""SMS transport delivering notification text through Twilio."""

from __future__ import annotations

import logging

from twilio.base.exceptions import TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from app.config import Settings
from app.domain.entities import DeliveryResult

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "SMS provider not configured"


class SmsTransport:
    """Send SMS messages with the Twilio Messages API."""

    def __init__(
        self,
        *,
        account_sid: str | None,
        auth_token: str | None,
        from_number: str | None,
        timeout: float = 10.0,
    ) -> None:
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmsTransport":
        return cls(
            account_sid=settings.twilio_account_sid,
            auth_token=settings.twilio_auth_token,
            from_number=settings.twilio_phone_number,
            timeout=settings.provider_timeout_seconds,
        )

    @property
    def configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)

    def send(self, phone_number: str, text: str) -> DeliveryResult:
        """Send ``text`` to ``phone_number``; never raises."""

        if not self.configured:
            logger.info("Twilio configuration incomplete; skipping SMS delivery")
            return DeliveryResult.failure(NOT_CONFIGURED_MESSAGE)

        try:
            client = Client(
                self.account_sid,
                self.auth_token,
                http_client=TwilioHttpClient(timeout=self.timeout),
            )
            message = client.messages.create(body=text, from_=self.from_number, to=phone_number)
        except TwilioRestException as exc:
            logger.error(
                "Twilio API request failed with status %s (code %s): %s",
                exc.status,
                exc.code,
                exc.msg,
            )
            return DeliveryResult.failure(
                str(exc.msg or "Twilio request failed"),
                provider_response={
                    "status_code": exc.status,
                    "code": exc.code,
                    "message": exc.msg,
                    "more_info": getattr(exc, "more_info", None),
                },
            )
        except Exception as exc:  # connection errors surface from the HTTP client
            logger.exception("Error sending SMS via Twilio: %s", exc)
            return DeliveryResult.failure(f"Twilio request failed: {exc}")

        return DeliveryResult.success(
            {"sid": getattr(message, "sid", None), "status": getattr(message, "status", None)}
        )


__all__ = ["NOT_CONFIGURED_MESSAGE", "SmsTransport"]
