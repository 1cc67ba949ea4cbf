"""
Centralized configuration management powered by pydantic-settings.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Supported runtime environments."""

    LOCAL = "local"
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class AppSettings(BaseModel):
    """Application metadata and runtime toggles."""

    name: str = Field(default="gin-golang-api", description="Service name reported by /health.")
    version: str = Field(default="1.0.0", description="Deployed application version.")
    environment: Environment = Field(
        default=Environment.LOCAL, description="Deployment environment identifier."
    )
    debug: bool = Field(default=False, description="Enable debug features and verbose logs.")


class ServerSettings(BaseModel):
    """HTTP server binding and process settings."""

    host: str = Field(default="0.0.0.0", description="Interface to bind.")
    port: int = Field(default=8080, ge=1, le=65535, description="Port to listen on.")
    workers: PositiveInt = Field(
        default=1,
        description="Worker processes. Each worker owns separate in-memory repositories.",
    )
    backlog: PositiveInt = Field(default=2048, description="Socket listen backlog.")


class CorsSettings(BaseModel):
    """Cross-origin resource sharing policy."""

    allow_origins: list[str] = Field(
        default=["*"], description="Allowed request origins (JSON list in the environment)."
    )
    allow_credentials: bool = Field(
        default=False, description="Whether cookies and auth headers are allowed."
    )


class LoggingSettings(BaseModel):
    """Logging configuration shared across the project."""

    level: str = Field(default="INFO", description="Root logging level.")
    format: str = Field(
        default="%(asctime)s | %(levelname)s | %(name)s | [%(request_id)s] %(message)s",
        description="Standard logging format string.",
    )
    to_file: bool = Field(default=True, description="Also write logs to a rotating file.")
    directory: Path = Field(default=Path("logs"), description="Directory for log files.")
    file_name: str = Field(default="app.log", description="Primary log file name.")
    max_bytes: PositiveInt = Field(
        default=5 * 1024 * 1024, description="Maximum file size before rotating."
    )
    backup_count: PositiveInt = Field(default=5, description="Number of rotated log files to keep.")


class Settings(BaseSettings):
    """Top-level application settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    cors: CorsSettings = CorsSettings()
    logging: LoggingSettings = LoggingSettings()


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance loaded from the current environment."""

    return Settings()


__all__ = [
    "AppSettings",
    "CorsSettings",
    "Environment",
    "LoggingSettings",
    "ServerSettings",
    "Settings",
    "get_settings",
]
