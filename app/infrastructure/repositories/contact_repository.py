"""Read recipient contact details from profile and player records."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.domain.entities import ContactInfo
from app.infrastructure.models import PlayerModel, ProfileModel

logger = logging.getLogger(__name__)


class ContactRepository:
    """Assemble a :class:`ContactInfo` snapshot for a recipient."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_contact_info(self, user_id: str) -> ContactInfo | None:
        """Return the recipient's contact details, or ``None`` without a profile.

        A missing player record only means the recipient never registered a
        device, so push is reported as disabled.
        """

        profile = self.session.get(ProfileModel, user_id)
        if profile is None:
            logger.warning("No profile found for user %s", user_id)
            return None

        player = self.session.get(PlayerModel, user_id)
        return ContactInfo(
            email=profile.email,
            phone=profile.phone,
            phone_verified=bool(profile.phone_verified),
            push_token=player.expo_push_token if player is not None else None,
            push_enabled=bool(player.push_notifications_enabled) if player is not None else False,
        )


__all__ = ["ContactRepository"]
