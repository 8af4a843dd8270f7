"""Entry point receiving newly created notifications for delivery."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app.application.use_cases.delivery import (
    INVALID_REQUEST_MESSAGE,
    NotificationDispatcher,
    is_scheduled_for_later,
    unwrap_notification_record,
)
from app.interfaces.api.dependencies import get_dispatcher
from app.interfaces.api.schemas import NotificationRecord

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dispatch"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, x-service-key",
}


def _json(status_code: int, content: dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report errors raised outside a handler, such as failing dependencies."""

    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return _json(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {"success": False, "error": str(exc) or "Internal error"},
    )


@router.options("/send-notification")
def send_notification_preflight() -> Response:
    """Answer CORS preflight requests."""

    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=CORS_HEADERS)


@router.post("/send-notification")
async def send_notification(
    request: Request,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Deliver a freshly inserted notification over every enabled channel."""

    try:
        body = await request.json()
        raw_record = unwrap_notification_record(body)
        record = NotificationRecord.model_validate(raw_record)
    except ValueError as exc:  # covers JSON decoding and record validation
        logger.warning("Rejecting dispatch request: %s", exc)
        return _json(
            status.HTTP_400_BAD_REQUEST,
            {"success": False, "error": INVALID_REQUEST_MESSAGE},
        )

    notification = record.to_entity()
    if is_scheduled_for_later(notification):
        logger.info(
            "Notification %s scheduled for %s; deferring delivery",
            notification.id,
            raw_record.get("scheduled_at"),
        )
        return _json(
            status.HTTP_200_OK,
            {
                "success": True,
                "message": "Notification scheduled for later delivery",
                "scheduled_at": raw_record.get("scheduled_at"),
            },
        )

    try:
        report = await run_in_threadpool(dispatcher.dispatch, notification)
    except Exception as exc:  # surfaced to the caller as a 500 payload
        logger.exception("Error dispatching notification %s", notification.id)
        return _json(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"success": False, "error": str(exc) or "Internal error"},
        )

    return _json(
        status.HTTP_200_OK,
        {"success": True, "notification_id": report.notification_id},
    )
