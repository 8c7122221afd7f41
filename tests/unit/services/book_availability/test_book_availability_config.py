"""Tests for book availability configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.services.book_availability.adapters.library_api import DEFAULT_API_BASE_URL
from src.services.book_availability.config import BookAvailabilityConfig, load_config


class TestBookAvailabilityConfig:
    """Test suite for BookAvailabilityConfig."""

    def test_defaults(self) -> None:
        config = BookAvailabilityConfig()

        assert config.api_base_url == DEFAULT_API_BASE_URL
        assert config.search_radius_km == 5.0
        assert config.timeout_seconds == 5.0
        assert config.retry_max_attempts == 3
        assert config.max_concurrency is None
        assert config.log_level == "INFO"
        assert config.credentials == ()

    def test_credentials_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("BOOK_AVAILABILITY_AUTH_KEYS", "k1, k2,,k3 ")

        config = load_config()

        assert config.credentials == ("k1", "k2", "k3")

    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("BOOK_AVAILABILITY_SEARCH_RADIUS_KM", "12.5")
        monkeypatch.setenv("BOOK_AVAILABILITY_MAX_CONCURRENCY", "4")
        monkeypatch.setenv("BOOK_AVAILABILITY_API_BASE_URL", "http://localhost:9000/api")

        config = BookAvailabilityConfig()

        assert config.search_radius_km == 12.5
        assert config.max_concurrency == 4
        assert config.api_base_url == "http://localhost:9000/api"

    def test_env_file(self, tmp_path) -> None:
        (tmp_path / ".env").write_text("BOOK_AVAILABILITY_AUTH_KEYS=from-file\n")

        config = BookAvailabilityConfig()

        assert config.credentials == ("from-file",)

    def test_log_level_normalized(self) -> None:
        assert BookAvailabilityConfig(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BookAvailabilityConfig(log_level="chatty")

    @pytest.mark.parametrize(
        "field,value",
        [
            ("search_radius_km", -1.0),
            ("timeout_seconds", 0.0),
            ("retry_max_attempts", 0),
            ("max_concurrency", 0),
        ],
    )
    def test_out_of_range_values_rejected(self, field: str, value) -> None:
        with pytest.raises(ValidationError):
            BookAvailabilityConfig(**{field: value})
