"""FastAPI dependency utilities."""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.application.formatters import Branding
from app.application.use_cases.delivery import ChannelTransports, NotificationDispatcher
from app.config import Settings, get_settings
from app.infrastructure.database import get_db


def get_branding(settings: Settings = Depends(get_settings)) -> Branding:
    """Return the brand values configured for rendered messages."""

    return Branding(app_name=settings.app_name, deep_link_scheme=settings.deep_link_scheme)


def get_channel_transports(settings: Settings = Depends(get_settings)) -> ChannelTransports:
    """Return transports configured with the provider credentials."""

    return ChannelTransports.from_settings(settings)


def get_dispatcher(
    db: Session = Depends(get_db),
    transports: ChannelTransports = Depends(get_channel_transports),
    branding: Branding = Depends(get_branding),
) -> NotificationDispatcher:
    """Return a dispatcher bound to the request's database session."""

    return NotificationDispatcher.from_session(db, transports, branding)
