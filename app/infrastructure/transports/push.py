"""Push transport posting messages to the Expo push API."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any, Final

import httpx

from app.config import Settings
from app.domain.entities import DeliveryResult

logger = logging.getLogger(__name__)

DEFAULT_EXPO_PUSH_URL: Final[str] = "https://exp.host/--/api/v2/push/send"
EXPO_BATCH_SIZE: Final[int] = 100
INVALID_TOKEN_MESSAGE: Final[str] = "Invalid Expo push token format"

_PUSH_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"^Expo(?:nent)?PushToken\[[^\]]+\]$")


def is_expo_push_token(token: Any) -> bool:
    """Return whether ``token`` looks like an Expo push token."""

    return isinstance(token, str) and bool(_PUSH_TOKEN_PATTERN.match(token))


def _response_error_details(response: httpx.Response) -> str | None:
    try:
        payload = response.json()
    except ValueError:
        text = response.text.strip()
        return text or None
    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item.get("message"))
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
    return None


def _ticket_result(ticket: Any) -> DeliveryResult:
    if not isinstance(ticket, dict):
        return DeliveryResult.failure("Unexpected push ticket from Expo")
    if ticket.get("status") == "ok":
        return DeliveryResult.success(ticket)

    details = ticket.get("details")
    detail_error = details.get("error") if isinstance(details, dict) else None
    message = ticket.get("message") or detail_error or "Expo push ticket error"
    return DeliveryResult.failure(str(message), provider_response=ticket)


class PushTransport:
    """Send Expo push messages, one at a time or in batches of 100."""

    def __init__(
        self,
        *,
        url: str = DEFAULT_EXPO_PUSH_URL,
        access_token: str | None = None,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.url = url
        self.access_token = access_token
        self.timeout = timeout
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "PushTransport":
        return cls(
            url=settings.expo_push_url,
            access_token=settings.expo_access_token,
            timeout=settings.provider_timeout_seconds,
        )

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate",
            "Content-Type": "application/json",
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _post(self, messages: Sequence[dict[str, Any]]) -> httpx.Response:
        if self._client is not None:
            return self._client.post(self.url, json=list(messages), headers=self._headers())
        with httpx.Client(timeout=self.timeout) as client:
            return client.post(self.url, json=list(messages), headers=self._headers())

    def _send_chunk(self, chunk: Sequence[dict[str, Any]]) -> list[DeliveryResult]:
        try:
            response = self._post(chunk)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            details = _response_error_details(exc.response)
            logger.error(
                "Expo push API responded with status %s: %s", status_code, details or "-"
            )
            failure = DeliveryResult.failure(
                details or f"Expo push API responded with status {status_code}",
                provider_response={"status_code": status_code, "body": exc.response.text},
            )
            return [failure] * len(chunk)
        except httpx.HTTPError as exc:
            logger.error("Expo push request failed: %s", exc)
            return [DeliveryResult.failure(f"Expo push request failed: {exc}")] * len(chunk)
        except ValueError:
            logger.error("Expo push API returned a non-JSON response")
            return [DeliveryResult.failure("Unexpected response from Expo push API")] * len(chunk)

        tickets = payload.get("data") if isinstance(payload, dict) else None
        if isinstance(tickets, dict):
            tickets = [tickets]
        if not isinstance(tickets, list) or len(tickets) != len(chunk):
            logger.error("Expo push API returned %s for %s messages", payload, len(chunk))
            failure = DeliveryResult.failure(
                "Unexpected response from Expo push API",
                provider_response=payload if isinstance(payload, dict) else None,
            )
            return [failure] * len(chunk)

        results = [_ticket_result(ticket) for ticket in tickets]
        for result in results:
            if not result.succeeded:
                logger.warning("Expo push ticket error: %s", result.error_message)
        return results

    def send(self, message: dict[str, Any]) -> DeliveryResult:
        """Send one push message; never raises."""

        return self.send_batch([message])[0]

    def send_batch(self, messages: Sequence[dict[str, Any]]) -> list[DeliveryResult]:
        """Send ``messages`` in chunks and return one result per message, in order."""

        results: list[DeliveryResult | None] = [None] * len(messages)
        pending: list[int] = []
        for index, message in enumerate(messages):
            token = message.get("to")
            if is_expo_push_token(token):
                pending.append(index)
            else:
                logger.info("Rejecting push message with invalid token %r", token)
                results[index] = DeliveryResult.failure(
                    INVALID_TOKEN_MESSAGE, provider_response={"to": token}
                )

        for start in range(0, len(pending), EXPO_BATCH_SIZE):
            indexes = pending[start : start + EXPO_BATCH_SIZE]
            chunk_results = self._send_chunk([messages[index] for index in indexes])
            for index, result in zip(indexes, chunk_results):
                results[index] = result

        return [result for result in results if result is not None]


__all__ = [
    "DEFAULT_EXPO_PUSH_URL",
    "EXPO_BATCH_SIZE",
    "INVALID_TOKEN_MESSAGE",
    "PushTransport",
    "is_expo_push_token",
]
