"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from property_planner.config import (
    AppSettings,
    PersistenceSettings,
    Settings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestPersistenceSettings:
    """Tests for the persistence section."""

    def test_defaults(self):
        settings = PersistenceSettings()
        assert settings.storage_key == "scenario_store_v1"
        assert settings.store_version == 1
        assert settings.debounce_seconds == 0.5

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("PLANNER_PERSISTENCE_DEBOUNCE_MS", "250")
        monkeypatch.setenv("PLANNER_PERSISTENCE_STORAGE_KEY", "other")
        settings = Settings().persistence
        assert settings.debounce_ms == 250
        assert settings.storage_key == "other"

    def test_negative_debounce_rejected(self, monkeypatch):
        monkeypatch.setenv("PLANNER_PERSISTENCE_DEBOUNCE_MS", "-1")
        with pytest.raises(ValidationError):
            PersistenceSettings()


class TestAppSettings:
    """Tests for application settings."""

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", " debug ")
        assert AppSettings().log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            AppSettings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestValidateAllSettings:
    """Tests for the startup check."""

    def test_all_valid(self):
        assert validate_all_settings() == {"persistence": True, "app": True}

    def test_reports_broken_section(self, monkeypatch):
        monkeypatch.setenv("PROJECTION_YEARS", "99")
        results = validate_all_settings()
        assert results["persistence"] is True
        assert results["app"] is False
        assert "projection_years" in results["app_error"]
