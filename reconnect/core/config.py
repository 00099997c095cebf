"""Environment-driven settings for the relationship tracking service."""
from __future__ import annotations

import os
from functools import lru_cache
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()

SQLITE_SCHEMES = ("sqlite:///", "sqlite://")

# Settings field -> environment variable.
ENVIRONMENT_VARIABLES: dict[str, str] = {
    "app_env": "APP_ENV",
    "database_url": "DATABASE_URL",
    "cors_origins": "CORS_ORIGINS",
    "version": "APP_VERSION",
    "log_level": "LOG_LEVEL",
    "host": "HOST",
    "port": "PORT",
    "clamp_relationship_score": "CLAMP_RELATIONSHIP_SCORE",
    "dashboard_recent_limit": "DASHBOARD_RECENT_LIMIT",
    "dashboard_tags_limit": "DASHBOARD_TAGS_LIMIT",
    "dashboard_events_limit": "DASHBOARD_EVENTS_LIMIT",
}


class Settings(BaseModel):
    """Runtime configuration; every field can be overridden from the environment."""

    app_env: str = "dev"
    database_url: str = "sqlite:///./reconnect.db"
    cors_origins: list[str] = Field(default_factory=list)
    version: str = "0.1.0"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    # Keep relationship scores within 0..100 after rounding.
    clamp_relationship_score: bool = True
    dashboard_recent_limit: int = Field(default=5, ge=1)
    dashboard_tags_limit: int = Field(default=10, ge=1)
    dashboard_events_limit: int = Field(default=5, ge=1)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value or []

    @property
    def async_database_url(self) -> str:
        """``database_url`` with plain SQLite URLs switched to the aiosqlite driver."""
        for scheme in SQLITE_SCHEMES:
            if self.database_url.startswith(scheme):
                return "sqlite+aiosqlite://" + self.database_url[len("sqlite://"):]
        return self.database_url

    @property
    def is_sqlite(self) -> bool:
        return self.async_database_url.startswith("sqlite")


def _build_settings() -> Settings:
    overrides = {
        field: os.environ[variable]
        for field, variable in ENVIRONMENT_VARIABLES.items()
        if variable in os.environ
    }
    return Settings(**overrides)


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings, read once."""
    return _build_settings()
