"""Use case dispatching a notification already stored in the database."""

from sqlalchemy.orm import Session

from app.application.formatters import Branding
from app.infrastructure.repositories import NotificationRepository

from .dispatcher import ChannelTransports, DispatchReport, NotificationDispatcher


def dispatch_stored_notification(
    session: Session,
    notification_id: str,
    transports: ChannelTransports,
    *,
    branding: Branding | None = None,
) -> DispatchReport:
    """Load ``notification_id`` and dispatch it, raising if it does not exist."""

    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        raise ValueError(f"Notification {notification_id} not found")
    dispatcher = NotificationDispatcher.from_session(session, transports, branding)
    return dispatcher.dispatch(notification)
