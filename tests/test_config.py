"""Tests for environment configuration."""

import pytest

from fintracker_mcp.config import Settings, load_settings
from fintracker_mcp.periods import PeriodKind


class TestLoadSettings:
    """Test FINTRACKER_* variable parsing."""

    def test_defaults(self):
        settings = load_settings({"FINTRACKER_TELEGRAM_ID": "42"})
        assert settings == Settings(telegram_id=42)
        assert settings.gateway_url == "http://localhost:8080"
        assert settings.default_period == PeriodKind.DAY

    def test_overrides(self):
        settings = load_settings({
            "FINTRACKER_TELEGRAM_ID": "42",
            "FINTRACKER_GATEWAY_URL": "https://tracker.example.com",
            "FINTRACKER_DEFAULT_PERIOD": "Week",
            "FINTRACKER_TRANSACTIONS_LIMIT": "500",
            "FINTRACKER_TIMEOUT": "2.5",
        })
        assert settings.gateway_url == "https://tracker.example.com"
        assert settings.default_period == PeriodKind.WEEK
        assert settings.transactions_limit == 500
        assert settings.timeout == 2.5

    def test_missing_telegram_id(self):
        with pytest.raises(ValueError, match="FINTRACKER_TELEGRAM_ID"):
            load_settings({})

    def test_non_integer_telegram_id(self):
        with pytest.raises(ValueError, match="integer"):
            load_settings({"FINTRACKER_TELEGRAM_ID": "abc"})

    def test_invalid_default_period(self):
        with pytest.raises(ValueError, match="FINTRACKER_DEFAULT_PERIOD"):
            load_settings({"FINTRACKER_TELEGRAM_ID": "42", "FINTRACKER_DEFAULT_PERIOD": "quarter"})
