"""
Repository classes for in-memory entity storage.

This module provides specialized repositories for different entity types:
- PostRepository: Data access for Post entities
- UserRepository: Data access for User entities
"""

from .base import BaseRepository
from .post import DEFAULT_AUTHOR_ID, PostRepository
from .user import UserRepository

__all__ = ["BaseRepository", "DEFAULT_AUTHOR_ID", "PostRepository", "UserRepository"]
