"""
Shared pytest fixtures for settings, repositories, and the HTTP client.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from resource_api.api.main import create_app
from resource_api.config import AppSettings, LoggingSettings, Settings
from resource_api.db.repositories import PostRepository, UserRepository


@pytest.fixture
def settings() -> Settings:
    """Test-friendly settings that never touch the filesystem."""

    return Settings(
        app=AppSettings(name="test-api", version="9.9.9"),
        logging=LoggingSettings(to_file=False),
    )


@pytest.fixture
def user_repo() -> UserRepository:
    """Fresh, empty user repository."""

    return UserRepository()


@pytest.fixture
def post_repo(user_repo: UserRepository) -> PostRepository:
    """Fresh post repository wired to ``user_repo``."""

    return PostRepository(user_repo)


@pytest.fixture
def app(settings: Settings, user_repo: UserRepository, post_repo: PostRepository) -> FastAPI:
    """Application instance sharing the repository fixtures."""

    return create_app(settings, users=user_repo, posts=post_repo)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Synchronous HTTP client bound to ``app``."""

    with TestClient(app) as test_client:
        yield test_client
