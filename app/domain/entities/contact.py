"""Domain entity describing how a recipient can be reached."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ContactInfo:
    """Snapshot of a recipient's addresses, read once per dispatch."""

    email: str | None = None
    phone: str | None = None
    phone_verified: bool = False
    push_token: str | None = None
    push_enabled: bool = False


__all__ = ["ContactInfo"]
