"""Use cases reading the effective channel preferences of a user or organization."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import ResolvedPreference
from app.infrastructure.repositories import PreferenceRepository

from .preferences import resolve_preferences


def get_user_preference_matrix(session: Session, user_id: str) -> Sequence[ResolvedPreference]:
    """Return every type and channel for ``user_id`` with explicit values applied."""

    return resolve_preferences(PreferenceRepository(session).list_user_preferences(user_id))


def get_organization_preference_matrix(
    session: Session, organization_id: str
) -> Sequence[ResolvedPreference]:
    """Return every type and channel for ``organization_id`` with explicit values applied."""

    explicit_rows = PreferenceRepository(session).list_organization_preferences(organization_id)
    return resolve_preferences(explicit_rows)
