"""
Post repository for data access operations on Post entities.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..models import Post, next_timestamp
from .base import BaseRepository
from .user import UserRepository

LOGGER = logging.getLogger(__name__)

# Author recorded when no user exists yet.
DEFAULT_AUTHOR_ID = 1


class PostRepository(BaseRepository[Post]):
    """
    In-memory store for Post entities.

    Posts carry no uniqueness constraints. Every new post is attributed to
    the first user of ``users`` at creation time (or ``DEFAULT_AUTHOR_ID``);
    callers cannot choose the author and the relation is not validated.
    """

    entity_name = "Post"

    def __init__(self, users: UserRepository) -> None:
        super().__init__()
        self._users = users

    async def create(self, title: str, content: str) -> Post:
        """Store a new post authored by the current first user."""
        # Read the author before taking our own lock so the two repositories
        # are never held together.
        first_user_id = await self._users.first_id()
        author_id = DEFAULT_AUTHOR_ID if first_user_id is None else first_user_id

        async with self._lock:
            now = next_timestamp()
            post = Post(
                id=self._allocate_id(),
                title=title,
                content=content,
                author_id=author_id,
                created_at=now,
                updated_at=now,
            )
            self._items.append(post)

        LOGGER.info("Created post %d (author %d)", post.id, author_id)
        return post

    async def update(self, post_id: int, title: str, content: str) -> Post:
        """Replace title and content; the author is never re-derived."""
        async with self._lock:
            index = self._index_of(post_id)
            current = self._items[index]
            updated = replace(
                current,
                title=title,
                content=content,
                updated_at=next_timestamp(current.updated_at),
            )
            self._items[index] = updated

        LOGGER.info("Updated post %d", post_id)
        return updated


__all__ = ["DEFAULT_AUTHOR_ID", "PostRepository"]
