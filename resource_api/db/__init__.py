"""
In-memory storage toolkit exposing entity records and repositories.
"""

from .models import Post, User
from .repositories import BaseRepository, PostRepository, UserRepository

__all__ = [
    "BaseRepository",
    "Post",
    "PostRepository",
    "User",
    "UserRepository",
]
