"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    fdc_api_key: str
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    default_pax: int = 2
    expiring_soon_days: int = 20
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_tag_list(raw: str | None) -> list[str]:
    """Split a comma-separated query value into trimmed tags."""
    if raw is None:
        return []
    return [chunk.strip() for chunk in raw.split(",") if chunk.strip()]
