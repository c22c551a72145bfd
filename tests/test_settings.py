"""Unit tests covering the typed application settings implementation."""

from __future__ import annotations

import logging

import pytest

from pokedex.settings import (
    DEFAULT_CATALOG_API_BASE_URL,
    DEFAULT_CATALOG_LIMIT,
    AppSettings,
)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CATALOG_API_BASE_URL",
        "CATALOG_LIMIT",
        "HTTP_TIMEOUT_SECONDS",
        "DETAIL_FETCH_DELAY_SECONDS",
        "CORS_ALLOW_ORIGINS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_point_at_public_api() -> None:
    configured = AppSettings(_env_file=None)

    assert configured.normalized_base_url == DEFAULT_CATALOG_API_BASE_URL
    assert configured.catalog_limit == DEFAULT_CATALOG_LIMIT
    assert configured.optional_config_warnings() == []


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATALOG_API_BASE_URL", "https://mirror.example/api/v2/")
    monkeypatch.setenv("CATALOG_LIMIT", "20")
    monkeypatch.setenv("DETAIL_FETCH_DELAY_SECONDS", "0")

    configured = AppSettings(_env_file=None)

    assert configured.normalized_base_url == "https://mirror.example/api/v2"
    assert configured.catalog_limit == 20
    assert configured.detail_fetch_delay_seconds == 0


def test_optional_config_warnings_flag_insecure_and_unbounded(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("CATALOG_API_BASE_URL", "http://localhost:8080/api/v2")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "0")

    warnings = AppSettings(_env_file=None).optional_config_warnings()

    assert any("CATALOG_API_BASE_URL" in warning for warning in warnings)
    assert any("HTTP_TIMEOUT_SECONDS" in warning for warning in warnings)


def test_cors_origins_are_normalised(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", " https://app.example/ , ,http://localhost:8081")

    configured = AppSettings(_env_file=None)

    assert configured.cors_allow_origins == [
        "https://app.example",
        "http://localhost:8081",
    ]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("chatty", logging.INFO)],
)
def test_log_level_numeric(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: int
) -> None:
    monkeypatch.setenv("LOG_LEVEL", raw)

    assert AppSettings(_env_file=None).log_level_numeric == expected
