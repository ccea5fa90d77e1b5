"""Tests for environment-driven settings."""

import pytest

from windowlimit.config import Settings, _load_settings


class TestLoadSettings:
    def test_defaults(self, monkeypatch):
        for key in (
            "WINDOWLIMIT_DEFAULT_INTERVAL",
            "WINDOWLIMIT_HTTP_BASE_URL",
            "WINDOWLIMIT_HTTP_TIMEOUT",
            "WINDOWLIMIT_LOG_LEVEL",
        ):
            monkeypatch.delenv(key, raising=False)
        assert _load_settings() == Settings()

    def test_interval_unit_name(self, monkeypatch):
        monkeypatch.setenv("WINDOWLIMIT_DEFAULT_INTERVAL", "minute")
        assert _load_settings().default_interval == "minute"

    def test_interval_milliseconds(self, monkeypatch):
        monkeypatch.setenv("WINDOWLIMIT_DEFAULT_INTERVAL", "2500")
        assert _load_settings().default_interval == 2500.0

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("WINDOWLIMIT_HTTP_BASE_URL", "https://api.example.com")
        monkeypatch.setenv("WINDOWLIMIT_HTTP_TIMEOUT", "5")
        monkeypatch.setenv("WINDOWLIMIT_LOG_LEVEL", "debug")
        settings = _load_settings()
        assert settings.http_base_url == "https://api.example.com"
        assert settings.http_timeout == 5.0
        assert settings.log_level == "DEBUG"

    def test_bad_number_raises(self, monkeypatch):
        monkeypatch.setenv("WINDOWLIMIT_HTTP_TIMEOUT", "soon")
        with pytest.raises(RuntimeError, match="WINDOWLIMIT_HTTP_TIMEOUT"):
            _load_settings()
