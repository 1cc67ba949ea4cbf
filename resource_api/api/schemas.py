"""
Pydantic schemas for API request/response serialization.
"""

from __future__ import annotations

from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

# -----------------------------------------------------------------------------
# User Schemas
# -----------------------------------------------------------------------------


class UserWrite(BaseModel):
    """Request body for creating or replacing a user."""

    username: str = Field(..., min_length=1, description="Unique user name.")
    email: str = Field(..., min_length=1, description="Unique email address, stored as sent.")

    @field_validator("email")
    @classmethod
    def check_email_syntax(cls, v: str) -> str:
        """Reject malformed addresses (display names included) without normalizing."""
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(f"invalid email address: {exc}") from exc
        return v


class UserResponse(BaseModel):
    """Schema returned when fetching a single user or list item."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique user identifier.")
    username: str = Field(..., description="Unique user name.")
    email: str = Field(..., description="Unique email address.")
    created_at: datetime = Field(..., description="Record creation timestamp.")
    updated_at: datetime = Field(..., description="Record last update timestamp.")


class UserListResponse(BaseModel):
    """All users with their count."""

    users: list[UserResponse] = Field(default_factory=list, description="Users in creation order.")
    count: int = Field(..., ge=0, description="Number of users.")


# -----------------------------------------------------------------------------
# Post Schemas
# -----------------------------------------------------------------------------


class PostWrite(BaseModel):
    """Request body for creating or replacing a post."""

    title: str = Field(..., min_length=1, description="Post title.")
    content: str = Field(..., min_length=1, description="Post body.")


class PostResponse(BaseModel):
    """Schema returned when fetching a single post or list item."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique post identifier.")
    title: str = Field(..., description="Post title.")
    content: str = Field(..., description="Post body.")
    author_id: int = Field(..., description="Identifier of the attributed user.")
    created_at: datetime = Field(..., description="Record creation timestamp.")
    updated_at: datetime = Field(..., description="Record last update timestamp.")


class PostListResponse(BaseModel):
    """All posts with their count."""

    posts: list[PostResponse] = Field(default_factory=list, description="Posts in creation order.")
    count: int = Field(..., ge=0, description="Number of posts.")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str = Field(..., description="Human-readable outcome.")


# -----------------------------------------------------------------------------
# Health / Status Schemas
# -----------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """Liveness payload."""

    status: str = Field(default="healthy", description="Overall service status.")
    service: str = Field(..., description="Service name.")
    timestamp: datetime = Field(..., description="Current server time (UTC).")
    version: str = Field(..., description="Application version.")


class ResourceEndpoints(BaseModel):
    """Operations available on one resource collection."""

    list: str
    create: str
    get: str
    update: str
    delete: str


class EndpointDirectory(BaseModel):
    """Map of the routes served by the API."""

    health: str = "/health"
    users: ResourceEndpoints
    posts: ResourceEndpoints


class RootResponse(BaseModel):
    """Service banner with an endpoint directory."""

    message: str = Field(..., description="Service banner.")
    version: str = Field(..., description="Application version.")
    endpoints: EndpointDirectory


# -----------------------------------------------------------------------------
# Error Schemas
# -----------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Structured error detail."""

    field: str | None = Field(default=None, description="Field that caused the error.")
    message: str = Field(..., description="Human-readable error message.")
    code: str | None = Field(default=None, description="Machine-readable error code.")


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Human-readable error description.")
    details: list[ErrorDetail] | None = Field(
        default=None,
        description="Per-field validation failures, when any.",
    )
    request_id: str | None = Field(default=None, description="Request trace ID for debugging.")


__all__ = [
    "EndpointDirectory",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "PostListResponse",
    "PostResponse",
    "PostWrite",
    "ResourceEndpoints",
    "RootResponse",
    "UserListResponse",
    "UserResponse",
    "UserWrite",
]
