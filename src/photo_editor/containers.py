"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from supabase import Client, create_client

from photo_editor.adapters.google_oauth_client import HttpxGoogleOAuthClient
from photo_editor.adapters.local_asset_store import LocalAssetStore
from photo_editor.adapters.supabase_asset_store import SupabaseAssetStore
from photo_editor.adapters.supabase_photo_repository import SupabasePhotoRepository
from photo_editor.config import Settings
from photo_editor.services.auth import AuthService
from photo_editor.services.photos import AssetStore, PhotoService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    photo_service: PhotoService
    close_resources: Callable[[], Awaitable[None]]


def build_asset_store(settings: Settings, supabase_client: Client) -> AssetStore:
    """
    Select the asset store named by STORAGE_BACKEND.

    Supported values (case-insensitive):
      - 'local' (default)
      - 'supabase'
    """
    backend = settings.storage_backend.strip().lower()
    if backend in ("local", ""):
        return LocalAssetStore(base_dir=Path(settings.upload_dir))
    if backend == "supabase":
        return SupabaseAssetStore(client=supabase_client, bucket=settings.supabase_bucket)
    error_message = f"Unknown storage backend: {backend}"
    raise ValueError(error_message)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    photo_service = PhotoService(
        repository=SupabasePhotoRepository(supabase_client),
        asset_store=build_asset_store(resolved_settings, supabase_client),
        max_image_bytes=resolved_settings.max_upload_bytes,
    )
    oauth_client = HttpxGoogleOAuthClient.create(
        client_id=resolved_settings.google_client_id,
        client_secret=resolved_settings.google_client_secret,
        redirect_uri=resolved_settings.google_callback_url,
    )
    auth_service = AuthService(
        oauth_client=oauth_client,
        secret=resolved_settings.jwt_secret,
        token_ttl=timedelta(minutes=resolved_settings.jwt_expires_minutes),
    )

    async def close_resources() -> None:
        await oauth_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        photo_service=photo_service,
        close_resources=close_resources,
    )
