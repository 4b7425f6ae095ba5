"""
Configuration Management for Property Planner

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Persistence tuning (storage key, schema version, debounce window) lives
next to the application defaults so a single place documents every knob.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PersistenceSettings(BaseSettings):
    """Durable scenario storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PLANNER_PERSISTENCE_",
        extra="ignore"
    )

    storage_key: str = Field(
        default="scenario_store_v1",
        min_length=1,
        description="Key of the single blob holding the scenario snapshot"
    )
    store_version: int = Field(
        default=1,
        ge=1,
        description="Snapshot version; stored documents with another version are ignored"
    )
    debounce_ms: int = Field(
        default=500,
        ge=0,
        description="Quiet period before a state change is written"
    )
    data_dir: str = Field(
        default=".planner_data",
        description="Directory used by the file-backed blob store"
    )
    read_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for transient read failures in the file-backed store"
    )

    @property
    def debounce_seconds(self) -> float:
        """Debounce window in seconds."""
        return self.debounce_ms / 1000.0


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    log_json: bool = Field(
        default=True,
        description="Render log lines as JSON (console rendering otherwise)"
    )

    # Scenario defaults
    default_scenario_name: str = Field(
        default="My first property",
        min_length=1,
        description="Name of the scenario seeded on first launch"
    )
    projection_years: int = Field(
        default=5,
        ge=1,
        le=30,
        description="Number of years modelled by the projections"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept any casing, store upper case."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def persistence(self) -> PersistenceSettings:
        return PersistenceSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.persistence
        results["persistence"] = True
    except Exception as e:
        results["persistence"] = False
        results["persistence_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
