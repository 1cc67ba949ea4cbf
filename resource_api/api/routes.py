"""
API route definitions for the users and posts resources.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, status

from .dependencies import (
    PostIdDep,
    PostRepoDep,
    SettingsDep,
    UserIdDep,
    UserRepoDep,
)
from .schemas import (
    EndpointDirectory,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
    PostListResponse,
    PostResponse,
    PostWrite,
    ResourceEndpoints,
    RootResponse,
    UserListResponse,
    UserResponse,
    UserWrite,
)

SERVICE_BANNER = "Gin Golang API Starter"

# -----------------------------------------------------------------------------
# Router Definitions
# -----------------------------------------------------------------------------

root_router = APIRouter(tags=["Root"])
health_router = APIRouter(tags=["Health"])
users_router = APIRouter(prefix="/users", tags=["Users"])
posts_router = APIRouter(prefix="/posts", tags=["Posts"])

_BAD_REQUEST = {"model": ErrorResponse, "description": "Invalid identifier or request body"}


def _resource_endpoints(prefix: str) -> ResourceEndpoints:
    return ResourceEndpoints(
        list=f"GET {prefix}",
        create=f"POST {prefix}",
        get=f"GET {prefix}/:id",
        update=f"PUT {prefix}/:id",
        delete=f"DELETE {prefix}/:id",
    )


# -----------------------------------------------------------------------------
# Root / Health Endpoints
# -----------------------------------------------------------------------------


@root_router.get(
    "/",
    response_model=RootResponse,
    summary="Service directory",
    description="Returns the service banner and the available endpoints.",
)
async def root(settings: SettingsDep) -> RootResponse:
    """Describe the service and its routes."""
    return RootResponse(
        message=SERVICE_BANNER,
        version=settings.app.version,
        endpoints=EndpointDirectory(
            users=_resource_endpoints(users_router.prefix),
            posts=_resource_endpoints(posts_router.prefix),
        ),
    )


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns the liveness status of the service.",
)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Report that the process is serving requests."""
    return HealthResponse(
        status="healthy",
        service=settings.app.name,
        timestamp=datetime.now(UTC),
        version=settings.app.version,
    )


# -----------------------------------------------------------------------------
# User Endpoints
# -----------------------------------------------------------------------------


@users_router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
    description="Retrieve every user in creation order.",
)
async def list_users(users: UserRepoDep) -> UserListResponse:
    """List all users."""
    items = await users.list_all()
    return UserListResponse(
        users=[UserResponse.model_validate(user) for user in items],
        count=len(items),
    )


@users_router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    responses={
        400: _BAD_REQUEST,
        409: {"model": ErrorResponse, "description": "Username or email already taken"},
    },
)
async def create_user(body: UserWrite, users: UserRepoDep) -> UserResponse:
    """Register a user with a unique username and email."""
    user = await users.create(body.username, body.email)
    return UserResponse.model_validate(user)


@users_router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user by ID",
    responses={
        400: _BAD_REQUEST,
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def get_user(user_id: UserIdDep, users: UserRepoDep) -> UserResponse:
    """Retrieve a single user by ID."""
    return UserResponse.model_validate(await users.get(user_id))


@users_router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
    responses={
        400: _BAD_REQUEST,
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "Username or email already taken"},
    },
)
async def update_user(user_id: UserIdDep, body: UserWrite, users: UserRepoDep) -> UserResponse:
    """Replace a user's username and email."""
    user = await users.update(user_id, body.username, body.email)
    return UserResponse.model_validate(user)


@users_router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete user",
    responses={
        400: _BAD_REQUEST,
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def delete_user(user_id: UserIdDep, users: UserRepoDep) -> MessageResponse:
    """Remove a user. Posts attributed to it are left untouched."""
    await users.delete(user_id)
    return MessageResponse(message="User deleted successfully")


# -----------------------------------------------------------------------------
# Post Endpoints
# -----------------------------------------------------------------------------


@posts_router.get(
    "",
    response_model=PostListResponse,
    summary="List posts",
    description="Retrieve every post in creation order.",
)
async def list_posts(posts: PostRepoDep) -> PostListResponse:
    """List all posts."""
    items = await posts.list_all()
    return PostListResponse(
        posts=[PostResponse.model_validate(post) for post in items],
        count=len(items),
    )


@posts_router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create post",
    responses={400: _BAD_REQUEST},
)
async def create_post(body: PostWrite, posts: PostRepoDep) -> PostResponse:
    """Create a post attributed to the first registered user."""
    post = await posts.create(body.title, body.content)
    return PostResponse.model_validate(post)


@posts_router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get post by ID",
    responses={
        400: _BAD_REQUEST,
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
async def get_post(post_id: PostIdDep, posts: PostRepoDep) -> PostResponse:
    """Retrieve a single post by ID."""
    return PostResponse.model_validate(await posts.get(post_id))


@posts_router.put(
    "/{post_id}",
    response_model=PostResponse,
    summary="Update post",
    responses={
        400: _BAD_REQUEST,
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
async def update_post(post_id: PostIdDep, body: PostWrite, posts: PostRepoDep) -> PostResponse:
    """Replace a post's title and content."""
    post = await posts.update(post_id, body.title, body.content)
    return PostResponse.model_validate(post)


@posts_router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete post",
    responses={
        400: _BAD_REQUEST,
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
async def delete_post(post_id: PostIdDep, posts: PostRepoDep) -> MessageResponse:
    """Remove a post."""
    await posts.delete(post_id)
    return MessageResponse(message="Post deleted successfully")


__all__ = [
    "health_router",
    "posts_router",
    "root_router",
    "users_router",
]
