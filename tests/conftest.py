"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from photo_editor.config import Settings
from photo_editor.containers import AppContainer
from photo_editor.domain.photos import EditRecord, Photo, StoredAsset
from photo_editor.domain.users import Principal
from photo_editor.services.auth import AuthService, OAuthClient
from photo_editor.services.photos import AssetStore, PhotoRepository, PhotoService

PNG_DATA_URL = "data:image/png;base64,aGVsbG8="


@dataclass
class InMemoryPhotoRepository(PhotoRepository):
    """In-memory photo repository for tests."""

    photos: dict[UUID, Photo] = field(default_factory=dict)
    fail_writes: bool = False
    reads: int = 0

    def create_photo(self, owner_key: str, primary_asset: StoredAsset) -> Photo:
        if self.fail_writes:
            raise RuntimeError("database unavailable")
        photo = Photo(
            id=uuid4(),
            owner_key=owner_key,
            primary_asset=primary_asset,
            created_at=datetime.now(tz=UTC),
        )
        self.photos[photo.id] = photo
        return photo

    def get_photo(self, photo_id: UUID) -> Photo | None:
        self.reads += 1
        return self.photos.get(photo_id)

    def list_photos(self, owner_key: str) -> list[Photo]:
        return [photo for photo in self.photos.values() if photo.owner_key == owner_key]

    def save_edit_history(self, photo_id: UUID, edits: list[EditRecord]) -> None:
        if self.fail_writes:
            raise RuntimeError("database unavailable")
        self.photos[photo_id] = replace(self.photos[photo_id], edit_history=list(edits))

    def delete_photo(self, photo_id: UUID) -> None:
        if self.fail_writes:
            raise RuntimeError("database unavailable")
        self.photos.pop(photo_id, None)


@dataclass
class InMemoryAssetStore(AssetStore):
    """In-memory asset store that records writes and deletions."""

    assets: dict[str, bytes] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)
    fail_store: bool = False
    fail_delete: bool = False

    def store(self, content: bytes, extension: str | None, folder: str) -> StoredAsset:
        if self.fail_store:
            raise OSError("disk full")
        name = uuid4().hex
        if extension:
            name = f"{name}.{extension}"
        handle = f"{folder}/{name}"
        self.assets[handle] = content
        return StoredAsset(locator=f"/uploads/{handle}", delete_handle=handle)

    def delete(self, delete_handle: str) -> None:
        if self.fail_delete:
            raise OSError("permission denied")
        self.assets.pop(delete_handle, None)
        self.deleted.append(delete_handle)


@dataclass
class FakeOAuthClient(OAuthClient):
    """Fake Google client returning a fixed profile."""

    profile: dict[str, object] = field(
        default_factory=lambda: {
            "sub": "google-123",
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "picture": "https://example.com/ada.png",
        }
    )
    fail_exchange: bool = False
    codes: list[str] = field(default_factory=list)

    def authorization_url(self, state: str, scopes: tuple[str, ...]) -> str:
        return f"https://accounts.example.com/auth?state={state}"

    async def exchange_code(self, code: str) -> dict[str, object]:
        self.codes.append(code)
        if self.fail_exchange:
            raise RuntimeError("invalid_grant")
        return {"access_token": "provider-token"}

    async def fetch_profile(self, access_token: str) -> dict[str, object]:
        return self.profile


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        google_client_id="client-id",
        google_client_secret="client-secret",
        google_callback_url="http://testserver/auth/google/callback",
        jwt_secret="test-secret-with-enough-length-for-hs256",
        frontend_url="https://frontend.example.com",
    )


@pytest.fixture
def photo_repository() -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository()


@pytest.fixture
def asset_store() -> InMemoryAssetStore:
    return InMemoryAssetStore()


@pytest.fixture
def oauth_client() -> FakeOAuthClient:
    return FakeOAuthClient()


@pytest.fixture
def photo_service(
    photo_repository: InMemoryPhotoRepository, asset_store: InMemoryAssetStore
) -> PhotoService:
    return PhotoService(repository=photo_repository, asset_store=asset_store)


@pytest.fixture
def auth_service(settings: Settings, oauth_client: FakeOAuthClient) -> AuthService:
    return AuthService(oauth_client=oauth_client, secret=settings.jwt_secret)


@pytest.fixture
def container(
    settings: Settings, auth_service: AuthService, photo_service: PhotoService
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=auth_service,
        photo_service=photo_service,
        close_resources=close_resources,
    )


def auth_headers(container: AppContainer, principal_id: str) -> dict[str, str]:
    """Return a bearer header for a principal with the given id."""
    token = container.auth_service.issue_token(
        Principal(id=principal_id, name=principal_id, email=f"{principal_id}@example.com")
    )
    return {"Authorization": f"Bearer {token}"}
