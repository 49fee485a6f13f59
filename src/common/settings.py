"""
Application settings loaded from a YAML config file and environment variables.
The YAML file carries the `db` and `server` sections; `.env` and the process environment override it.
Keeping these helpers isolated keeps the API modules focused on request handling.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Final
from urllib.parse import quote_plus

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError

DEFAULT_CONFIG_FILE: Final[str] = "config/config.yaml"

REQUIRED_DB_PARTS: Final[tuple[str, ...]] = (
    "POSTGRES_HOST",
    "POSTGRES_DB",
    "POSTGRES_USER",
)

# YAML section/key -> settings field
_YAML_KEY_MAP: Final[dict[tuple[str, str], str]] = {
    ("db", "host"): "POSTGRES_HOST",
    ("db", "port"): "POSTGRES_PORT",
    ("db", "user"): "POSTGRES_USER",
    ("db", "password"): "POSTGRES_PASSWORD",
    ("db", "dbname"): "POSTGRES_DB",
    ("db", "sslmode"): "POSTGRES_SSLMODE",
    ("server", "host"): "API_HOST",
    ("server", "port"): "API_PORT",
}


class Settings(BaseModel):
    """Typed runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    PROJECT_NAME: str = "public-library"
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    POSTGRES_HOST: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str | None = None
    POSTGRES_USER: str | None = None
    POSTGRES_PASSWORD: str = ""
    POSTGRES_SSLMODE: str = "disable"
    DATABASE_URL: str | None = None
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080

    def resolved_database_url(self) -> str:
        """Return DATABASE_URL, or build one from the POSTGRES_* parts."""

        if self.DATABASE_URL:
            return self.DATABASE_URL
        user = quote_plus(str(self.POSTGRES_USER))
        password = quote_plus(self.POSTGRES_PASSWORD)
        credentials = f"{user}:{password}" if password else user
        return (
            f"postgresql+psycopg2://{credentials}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}"
            f"/{self.POSTGRES_DB}?sslmode={self.POSTGRES_SSLMODE}"
        )


def load_yaml_config(path: str | Path) -> dict[str, Any]:
    """Flatten the `db`/`server` sections of a YAML config file into settings keys."""

    with open(path, encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config at {path} must be a mapping, got: {type(loaded).__name__}")

    values: dict[str, Any] = {}
    for (section, key), field_name in _YAML_KEY_MAP.items():
        section_values = loaded.get(section) or {}
        if not isinstance(section_values, dict):
            raise ValueError(f"Section {section!r} in {path} must be a mapping")
        if section_values.get(key) not in (None, ""):
            values[field_name] = str(section_values[key])
    return values


def _resolve_config_file() -> Path | None:
    explicit = os.getenv("LIBRARY_CONFIG_FILE")
    if explicit:
        path = Path(explicit)
        if not path.exists():
            raise RuntimeError(f"LIBRARY_CONFIG_FILE points to a missing file: {explicit}")
        return path
    default_path = Path(DEFAULT_CONFIG_FILE)
    return default_path if default_path.exists() else None


def load_settings(*, load_env: bool = True) -> Settings:
    """Load and validate settings from the YAML file, `.env` and the process environment."""

    if load_env:
        load_dotenv()

    values: dict[str, Any] = {}
    config_file = _resolve_config_file()
    if config_file is not None:
        values.update(load_yaml_config(config_file))
    values.update({key: value for key, value in os.environ.items() if value != ""})

    if not values.get("DATABASE_URL"):
        missing = [key for key in REQUIRED_DB_PARTS if not values.get(key)]
        if missing:
            missing_values = ", ".join(sorted(missing))
            raise RuntimeError(
                f"Missing database configuration: {missing_values}. "
                "Set DATABASE_URL or populate these values in `.env` or the YAML config file."
            )

    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor for application settings."""

    return load_settings()
