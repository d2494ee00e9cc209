"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from coach_dashboard.domain.nutrition import MissingDayPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    environment: str = _ENVIRONMENT
    missing_day_policy: MissingDayPolicy = MissingDayPolicy.ZERO_FILL
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
