"""Centralized configuration management for the Pokedex service."""

from __future__ import annotations

import logging
from functools import lru_cache
from urllib.parse import urlsplit

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings singleton so every consumer of :mod:`pokedex.settings` sees them.
load_dotenv()


# -- Application-wide constants -------------------------------------------------

DEFAULT_CATALOG_API_BASE_URL = "https://pokeapi.co/api/v2"
DEFAULT_CATALOG_LIMIT = 151
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0
DEFAULT_DETAIL_FETCH_DELAY_SECONDS = 0.3
DEFAULT_FAVORITES_DATABASE_URL = "sqlite+aiosqlite:///./data/favorites.db"
DEFAULT_LOG_LEVEL = "INFO"


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Values are read from the environment (or ``.env``) using the aliases
    below. Helper properties translate raw values into the shapes consumed by
    the gateway and logging setup so callers never repeat parsing logic.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    catalog_api_base_url: str = Field(
        default=DEFAULT_CATALOG_API_BASE_URL,
        alias="CATALOG_API_BASE_URL",
        description="Base URL of the remote catalog REST API (PokeAPI v2).",
    )
    catalog_limit: int = Field(
        default=DEFAULT_CATALOG_LIMIT,
        alias="CATALOG_LIMIT",
        ge=1,
        description="Number of catalog entries requested by the single list fetch.",
    )
    http_timeout_seconds: float = Field(
        default=DEFAULT_HTTP_TIMEOUT_SECONDS,
        alias="HTTP_TIMEOUT_SECONDS",
        ge=0,
        description=(
            "Upper bound for each outbound fetch. A detail fetch that exceeds it"
            " ends in the error state instead of loading forever."
        ),
    )
    detail_fetch_delay_seconds: float = Field(
        default=DEFAULT_DETAIL_FETCH_DELAY_SECONDS,
        alias="DETAIL_FETCH_DELAY_SECONDS",
        ge=0,
        description="Pause between opening the detail view and issuing its fetch.",
    )
    favorites_database_url: str = Field(
        default=DEFAULT_FAVORITES_DATABASE_URL,
        alias="FAVORITES_DATABASE_URL",
        description="SQLAlchemy async URL of the local favorite flag store.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )
    cors_allow_origins_raw: str | None = Field(
        default=None,
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated origins allowed to call the view-state API.",
    )

    @property
    def normalized_base_url(self) -> str:
        """Return the catalog base URL without a trailing slash."""

        return self.catalog_api_base_url.strip().rstrip("/")

    @property
    def cors_allow_origins(self) -> list[str]:
        """Return normalised CORS origins supplied via environment variables."""

        if not self.cors_allow_origins_raw:
            return []

        origins = [
            origin.strip().rstrip("/")
            for origin in self.cors_allow_origins_raw.split(",")
        ]
        return [origin for origin in origins if origin]

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for questionable configuration."""

        warnings: list[str] = []

        scheme = urlsplit(self.normalized_base_url).scheme
        if scheme != "https":
            warnings.append(
                f"CATALOG_API_BASE_URL uses '{scheme or 'no'}' scheme - "
                "catalog traffic will not be encrypted"
            )

        if self.http_timeout_seconds == 0:
            warnings.append(
                "HTTP_TIMEOUT_SECONDS is 0 - fetches will never time out and a "
                "stalled detail view may load indefinitely"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_CATALOG_API_BASE_URL",
    "DEFAULT_CATALOG_LIMIT",
    "DEFAULT_DETAIL_FETCH_DELAY_SECONDS",
    "DEFAULT_FAVORITES_DATABASE_URL",
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "DEFAULT_LOG_LEVEL",
    "get_settings",
]
