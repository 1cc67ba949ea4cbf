"""
FastAPI dependency injection providers.
"""

from __future__ import annotations

import re
from typing import Annotated

from fastapi import Depends, Request

from ..config import Settings
from ..db.repositories import PostRepository, UserRepository
from ..exceptions import ValidationError

MAX_ENTITY_ID = 2**32 - 1

_DECIMAL_ID = re.compile(r"[0-9]+")


# -----------------------------------------------------------------------------
# Application State
# -----------------------------------------------------------------------------


async def get_app_settings(request: Request) -> Settings:
    """Provide the settings the application was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


# -----------------------------------------------------------------------------
# Repository Dependencies
# -----------------------------------------------------------------------------


async def get_user_repository(request: Request) -> UserRepository:
    """Provide the application's UserRepository."""
    return request.app.state.users


async def get_post_repository(request: Request) -> PostRepository:
    """Provide the application's PostRepository."""
    return request.app.state.posts


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]


# -----------------------------------------------------------------------------
# Path Parameters
# -----------------------------------------------------------------------------


def parse_entity_id(raw: str, entity_name: str) -> int:
    """
    Parse a decimal unsigned 32-bit identity.

    Signs, whitespace and values above ``MAX_ENTITY_ID`` are rejected.
    """
    if (
        not _DECIMAL_ID.fullmatch(raw)
        or len(raw.lstrip("0")) > len(str(MAX_ENTITY_ID))
        or int(raw) > MAX_ENTITY_ID
    ):
        raise ValidationError(f"Invalid {entity_name} ID", context={"value": raw})
    return int(raw)


async def get_user_id(user_id: str) -> int:
    """Validate the ``user_id`` path parameter."""
    return parse_entity_id(user_id, "user")


async def get_post_id(post_id: str) -> int:
    """Validate the ``post_id`` path parameter."""
    return parse_entity_id(post_id, "post")


UserIdDep = Annotated[int, Depends(get_user_id)]
PostIdDep = Annotated[int, Depends(get_post_id)]


__all__ = [
    "MAX_ENTITY_ID",
    "PostIdDep",
    "PostRepoDep",
    "SettingsDep",
    "UserIdDep",
    "UserRepoDep",
    "get_app_settings",
    "get_post_id",
    "get_post_repository",
    "get_user_id",
    "get_user_repository",
    "parse_entity_id",
]
