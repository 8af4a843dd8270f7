"""Email transport delivering rendered notifications through SendGrid."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import From, Mail

from app.application.formatters import EmailContent
from app.config import Settings
from app.domain.entities import DeliveryResult

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Email provider not configured"


def _decode_body(body: Any) -> str | None:
    """Return the provider body as text, or ``None`` when it is empty."""

    if body is None:
        return None
    if isinstance(body, bytes):
        text = body.decode("utf-8", errors="replace")
    elif isinstance(body, (dict, list)):
        text = json.dumps(body)
    else:
        text = str(body)
    return text.strip() or None


def _error_message(body: str | None) -> str | None:
    """Join the ``errors[].message`` entries of a SendGrid error body."""

    if body is None:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return body

    errors = payload.get("errors") if isinstance(payload, dict) else None
    if not isinstance(errors, list):
        return body

    messages: list[str] = []
    for error in errors:
        if not isinstance(error, dict) or not error.get("message"):
            continue
        message = str(error["message"])
        if error.get("help"):
            message = f"{message} (help: {error['help']})"
        messages.append(message)
    return "; ".join(messages) or body


class EmailTransport:
    """Send notification emails with the SendGrid v3 API."""

    def __init__(
        self,
        *,
        api_key: str | None,
        sender: str | None,
        sender_name: str | None = None,
    ) -> None:
        self.api_key = api_key
        self.sender = sender
        self.sender_name = sender_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailTransport":
        return cls(
            api_key=settings.sendgrid_api_key,
            sender=settings.sendgrid_sender,
            sender_name=settings.sendgrid_sender_name,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.sender)

    def _build_message(self, recipient: str, content: EmailContent) -> Mail:
        from_email = From(self.sender, self.sender_name) if self.sender_name else self.sender
        return Mail(
            from_email=from_email,
            to_emails=recipient,
            subject=content.subject,
            html_content=content.html,
        )

    def _failure(self, status_code: Any, raw_body: Any, fallback: str) -> DeliveryResult:
        body = _decode_body(raw_body)
        message = _error_message(body) or fallback
        logger.error("SendGrid request failed with status %s: %s", status_code, message)
        return DeliveryResult.failure(
            message, provider_response={"status_code": status_code, "body": body}
        )

    def send(self, recipient: str, content: EmailContent) -> DeliveryResult:
        """Deliver ``content`` to ``recipient``; never raises."""

        if not self.configured:
            logger.info("SendGrid configuration incomplete; skipping email delivery")
            return DeliveryResult.failure(NOT_CONFIGURED_MESSAGE)

        message = self._build_message(recipient, content)

        try:
            client = SendGridAPIClient(self.api_key)
            response = client.send(message)
        except Exception as exc:  # SendGrid raises python_http_client errors for non-2xx
            status_code = getattr(exc, "status_code", None)
            if status_code is None:
                logger.exception("Error sending email via SendGrid")
            return self._failure(
                status_code, getattr(exc, "body", None), str(exc) or "SendGrid request failed"
            )

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            return self._failure(
                status_code,
                getattr(response, "body", None),
                f"SendGrid responded with status {status_code}",
            )

        headers = getattr(response, "headers", None) or {}
        return DeliveryResult.success(
            {"status_code": status_code, "message_id": headers.get("X-Message-Id")}
        )


__all__ = ["EmailTransport", "NOT_CONFIGURED_MESSAGE"]
