"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_naive_utc,
    ensure_utc,
    is_in_future,
    now_in_utc,
    now_in_utc_naive,
)

__all__ = [
    "ensure_naive_utc",
    "ensure_utc",
    "is_in_future",
    "now_in_utc",
    "now_in_utc_naive",
]
