# This file defines runtime settings for the API layer in one place.
# It exists so versioning, pagination limits, timeouts, and the books table name can be configured without code edits.
# The loader layers API_* environment variables over the shared application settings.
# It also validates the table name so it is safe to place into SQL text.

from __future__ import annotations

import os
import re
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.common.settings import Settings, get_settings

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Public Library API"
    api_description: str = "A minimal REST API for managing books in a fictional public library"
    api_version_path: str = "/api/v1"
    app_version: str = "v1.0.0"
    host: str = "0.0.0.0"
    port: int = 8080
    environment: str = "local"
    database_url: str
    default_page_size: int = 10
    max_page_size: int = 100
    request_timeout_seconds: int = 30
    connect_timeout_seconds: int = 5
    health_check_timeout_seconds: int = 2
    allowed_origins: list[str] = Field(default_factory=list)
    books_table_name: str = "books"

    @field_validator("api_version_path")
    @classmethod
    def validate_api_version_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("api_version_path must start with '/'.")
        parts = [part for part in value.split("/") if part]
        if len(parts) < 2 or parts[-1].startswith("v") is False:
            raise ValueError("api_version_path must look like '/api/v1'.")
        return value.rstrip("/")

    @field_validator("books_table_name")
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"Unsafe SQL identifier: {value!r}")
        return value

    @field_validator(
        "default_page_size",
        "max_page_size",
        "request_timeout_seconds",
        "connect_timeout_seconds",
        "health_check_timeout_seconds",
    )
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    @model_validator(mode="after")
    def validate_page_size_bounds(self) -> ApiConfig:
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size must be <= max_page_size.")
        return self

    def api_version_label(self) -> str:
        return self.api_version_path.rstrip("/").split("/")[-1]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_api_config(settings: Settings | None = None) -> ApiConfig:
    """Build API configuration from shared settings and API_* environment variables."""

    resolved = settings or get_settings()

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Public Library API"),
        "api_version_path": os.getenv("API_VERSION_PATH", "/api/v1"),
        "app_version": os.getenv("APP_VERSION", "v1.0.0"),
        "host": resolved.API_HOST,
        "port": resolved.API_PORT,
        "environment": resolved.ENV,
        "database_url": resolved.resolved_database_url(),
        "default_page_size": _env_int("API_DEFAULT_PAGE_SIZE", 10),
        "max_page_size": _env_int("API_MAX_PAGE_SIZE", 100),
        "request_timeout_seconds": _env_int("API_REQUEST_TIMEOUT_SECONDS", 30),
        "connect_timeout_seconds": _env_int("API_CONNECT_TIMEOUT_SECONDS", 5),
        "health_check_timeout_seconds": _env_int("API_HEALTH_CHECK_TIMEOUT_SECONDS", 2),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "books_table_name": os.getenv("API_BOOKS_TABLE_NAME", "books"),
    }

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
