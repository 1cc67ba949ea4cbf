"""
User repository for data access operations on User entities.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ...exceptions import ConflictError
from ..models import User, next_timestamp
from .base import BaseRepository

LOGGER = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """In-memory store for User entities with unique usernames and emails."""

    entity_name = "User"

    async def first_id(self) -> int | None:
        """
        Return the id of the first user in list order, or None when empty.

        Does not take the lock.
        """
        items = self._items
        return items[0].id if items else None

    async def create(self, username: str, email: str) -> User:
        """
        Register a new user.

        Rejects the request when any existing user already has the username
        or the email; either clash alone is enough.
        """
        async with self._lock:
            if self._find_clash(username, email) is not None:
                LOGGER.warning("Rejected user create: username or email taken (%s)", username)
                raise ConflictError(
                    "User already exists",
                    context={"username": username, "email": email},
                )

            now = next_timestamp()
            user = User(
                id=self._allocate_id(),
                username=username,
                email=email,
                created_at=now,
                updated_at=now,
            )
            self._items.append(user)

        LOGGER.info("Created user %d (%s)", user.id, user.username)
        return user

    async def update(self, user_id: int, username: str, email: str) -> User:
        """
        Replace the username and email of an existing user.

        Uniqueness is checked against every other user; the target may keep
        its own values.
        """
        async with self._lock:
            index = self._index_of(user_id)
            if self._find_clash(username, email, exclude_id=user_id) is not None:
                LOGGER.warning("Rejected update of user %d: username or email taken", user_id)
                raise ConflictError(
                    "Username or email already exists",
                    context={"id": user_id, "username": username, "email": email},
                )

            current = self._items[index]
            updated = replace(
                current,
                username=username,
                email=email,
                updated_at=next_timestamp(current.updated_at),
            )
            self._items[index] = updated

        LOGGER.info("Updated user %d", user_id)
        return updated

    def _find_clash(
        self,
        username: str,
        email: str,
        *,
        exclude_id: int | None = None,
    ) -> User | None:
        for user in self._items:
            if user.id == exclude_id:
                continue
            if user.username == username or user.email == email:
                return user
        return None


__all__ = ["UserRepository"]
