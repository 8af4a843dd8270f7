"""Domain entity representing an organization used for branded messages."""

from dataclasses import dataclass


@dataclass(frozen=True)
class OrganizationInfo:
    """Organization details needed to brand outgoing email."""

    id: str
    name: str
    email: str | None = None
    website: str | None = None


__all__ = ["OrganizationInfo"]
