"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from field_service_tracker.domain.field_service import NumericPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    admin_token: str
    numeric_policy: NumericPolicy = NumericPolicy.REJECT
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
