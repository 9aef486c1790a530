"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # UI
    ui_origin: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"

    # Timeouts (seconds)
    provider_timeout_seconds: float = 4.0
    composition_timeout_seconds: float = 20.0

    # Fallback reproducibility
    fallback_seed: int = 42

    # Currency providers quote in; fallback offers are generated in it too
    provider_currency: str = "USD"

    # External APIs
    weather_base_url: str = "https://api.open-meteo.com/v1/forecast"
    geocoding_base_url: str = "https://geocoding-api.open-meteo.com/v1/search"

    # Fixture data (defaults to the bundled backend/trips/fixtures)
    fixtures_dir: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
