"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    google_client_id: str
    google_client_secret: str
    google_callback_url: str
    jwt_secret: str
    jwt_expires_minutes: int = 24 * 60
    frontend_url: str = "http://localhost:5173"
    oauth_success_path: str = "/oauth-success"
    cors_origins: str | None = None
    storage_backend: str = "local"
    upload_dir: str = "uploads"
    supabase_bucket: str = "photos"
    session_cookie_name: str = "session"
    session_cookie_secure: bool = False
    max_upload_bytes: int = 25 * 1024 * 1024
    port: int = 10000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_cors_origins(raw: str | None, frontend_url: str) -> list[str]:
    """Parse allowed CORS origins from env, falling back to the frontend URL."""
    origins = [frontend_url.rstrip("/")]
    if raw is None:
        return origins
    for chunk in raw.split(","):
        value = chunk.strip().rstrip("/")
        if value and value not in origins:
            origins.append(value)
    return origins
