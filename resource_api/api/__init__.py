"""
FastAPI REST API exposing the users and posts repositories.
"""

from .main import app, create_app
from .routes import health_router, posts_router, root_router, users_router

__all__ = [
    "app",
    "create_app",
    "health_router",
    "posts_router",
    "root_router",
    "users_router",
]
