"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    storage_bucket: str = "recipe-images"
    max_upload_bytes: int = 5 * 1024 * 1024
    image_cache_seconds: int = 31536000
    session_cookie_name: str = "sb-access-token"
    cors_allowed_origins: str = "*"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env."""
    if raw is None:
        return ["*"]
    origins = [chunk.strip() for chunk in raw.split(",") if chunk.strip()]
    return origins or ["*"]
