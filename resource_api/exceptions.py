"""
Exception hierarchy shared by the repositories and the HTTP layer.
"""

from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for all resource errors."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}


class NotFoundError(RepositoryError):
    """Raised when no entity exists with the requested identity."""


class ConflictError(RepositoryError):
    """Raised when a write would violate a uniqueness constraint."""


class ValidationError(RepositoryError):
    """Raised when a request carries a malformed identity or payload."""


__all__ = ["ConflictError", "NotFoundError", "RepositoryError", "ValidationError"]
