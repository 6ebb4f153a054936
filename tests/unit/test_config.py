"""Tests for Settings validation and environment loading."""

import pytest
from pydantic import ValidationError

from docsearch.core.config import Settings, get_settings


def test_base_url_trailing_slash_stripped() -> None:
    settings = Settings(base_url="https://es.local:9200/")
    assert settings.base_url == "https://es.local:9200"


def test_defaults() -> None:
    settings = Settings(base_url="http://localhost:9200")
    assert settings.request_timeout_seconds == 30.0
    assert "RoutingMissingException" in settings.routing_missing_markers
    assert settings.debug is False


def test_blank_base_url_rejected() -> None:
    with pytest.raises(ValidationError, match="DOCSEARCH_BASE_URL is required"):
        Settings(base_url="  ")


def test_non_http_base_url_rejected() -> None:
    with pytest.raises(ValidationError, match="must start with http"):
        Settings(base_url="ftp://es.local")


def test_empty_markers_rejected() -> None:
    with pytest.raises(ValidationError, match="ROUTING_MISSING_MARKERS"):
        Settings(base_url="http://localhost:9200", routing_missing_markers=[])


def test_non_positive_timeout_rejected() -> None:
    with pytest.raises(ValidationError, match="TIMEOUT"):
        Settings(base_url="http://localhost:9200", request_timeout_seconds=0)


def test_get_settings_reads_prefixed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """DOCSEARCH_* variables populate the cached settings."""
    monkeypatch.setenv("DOCSEARCH_BASE_URL", "https://search.internal:9200/")
    monkeypatch.setenv("DOCSEARCH_ROUTING_MISSING_MARKERS", '["parent_required"]')
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.base_url == "https://search.internal:9200"
        assert settings.routing_missing_markers == ["parent_required"]
        assert get_settings() is settings
    finally:
        get_settings.cache_clear()
