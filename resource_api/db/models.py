"""
In-memory entity records for users and posts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

_CLOCK_STEP = timedelta(microseconds=1)


def _utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(UTC)


def next_timestamp(previous: datetime | None = None) -> datetime:
    """
    Return the current UTC time, strictly later than ``previous`` when given.

    Two mutations inside the same clock tick would otherwise share a timestamp.
    """
    now = _utc_now()
    if previous is not None and now <= previous:
        return previous + _CLOCK_STEP
    return now


@dataclass(frozen=True, slots=True)
class User:
    """Registered user. Username and email are unique per repository."""

    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class Post:
    """Post attributed to a user by stored id only."""

    id: int
    title: str
    content: str
    author_id: int
    created_at: datetime
    updated_at: datetime


__all__ = ["Post", "User", "next_timestamp"]
