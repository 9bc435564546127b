"""Ownership-scoped photo and edit-history management."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from photo_editor.domain.errors import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    StoreFailureError,
)
from photo_editor.domain.photos import EditRecord, Photo, StoredAsset
from photo_editor.services.inline_images import decode_data_url, image_extension

logger = logging.getLogger(__name__)

ORIGINALS_FOLDER = "originals"
EDITS_FOLDER = "edits"
DEFAULT_MAX_IMAGE_BYTES = 25 * 1024 * 1024


class PhotoRepository(Protocol):
    """Persistence interface for photo records."""

    def create_photo(self, owner_key: str, primary_asset: StoredAsset) -> Photo:
        """Insert a photo with an empty edit history and return it."""

    def get_photo(self, photo_id: UUID) -> Photo | None:
        """Return a photo by id, if present."""

    def list_photos(self, owner_key: str) -> list[Photo]:
        """Return all photos owned by the key in creation order."""

    def save_edit_history(self, photo_id: UUID, edits: list[EditRecord]) -> None:
        """Replace the stored edit history of a photo."""

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo record."""


class AssetStore(Protocol):
    """Binary persistence for original and edited images."""

    def store(self, content: bytes, extension: str | None, folder: str) -> StoredAsset:
        """Persist bytes and return where they can be found."""

    def delete(self, delete_handle: str) -> None:
        """Remove a previously stored asset."""


@dataclass
class PhotoService:
    """Creates, lists, edits and deletes photos on behalf of their owner."""

    repository: PhotoRepository
    asset_store: AssetStore
    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES

    def create_photo(
        self, owner_key: str, content: bytes | None, extension: str | None = None
    ) -> Photo:
        """Store an uploaded original and create its record."""
        if not content:
            raise InvalidInputError("No file uploaded")
        if len(content) > self.max_image_bytes:
            raise InvalidInputError("Image too large")
        if extension is not None:
            extension = image_extension(extension)
        asset = self._store_asset(content, extension, ORIGINALS_FOLDER)
        try:
            photo = self.repository.create_photo(owner_key, asset)
        except Exception as exc:
            logger.exception("Failed to create photo", extra={"owner": owner_key})
            self._discard_asset(asset)
            raise StoreFailureError("Failed to save photo") from exc
        logger.info("Photo created", extra={"photo_id": str(photo.id)})
        return photo

    def list_photos(self, owner_key: str) -> list[Photo]:
        """Return the caller's photos."""
        return self.repository.list_photos(owner_key)

    def get_photo(self, owner_key: str, photo_id: UUID) -> Photo:
        """Return a photo only if the caller owns it.

        A missing photo is reported the same way as a foreign one so that
        callers cannot discover ids they do not own.
        """
        photo = self.repository.get_photo(photo_id)
        if photo is None or photo.owner_key != owner_key:
            raise ForbiddenError("Not authorized")
        return photo

    def append_edit(
        self,
        owner_key: str,
        photo_id: UUID,
        edit_kind: str | None,
        encoded_image: str | None,
    ) -> Photo:
        """Append an edited version decoded from a data URL."""
        photo = self.get_photo(owner_key, photo_id)
        kind = (edit_kind or "").strip()
        if not kind or not (encoded_image or "").strip():
            raise InvalidInputError("Missing type or base64 data")
        image = decode_data_url(encoded_image, self.max_image_bytes)
        asset = self._store_asset(image.content, image.extension, EDITS_FOLDER)
        edit = EditRecord(
            id=uuid4(),
            edit_kind=kind,
            asset=asset,
            applied_at=datetime.now(tz=UTC),
        )
        edits = [*photo.edit_history, edit]
        try:
            self.repository.save_edit_history(photo.id, edits)
        except Exception as exc:
            logger.exception("Failed to save edit", extra={"photo_id": str(photo.id)})
            self._discard_asset(asset)
            raise StoreFailureError("Failed to save edit") from exc
        return replace(photo, edit_history=edits)

    def remove_edit(
        self, owner_key: str, photo_id: UUID, edit_id: UUID | str
    ) -> Photo:
        """Remove one edited version, keeping the order of the rest.

        The edit id is checked only after the ownership gate, so a malformed id
        on a foreign photo is still reported as forbidden.
        """
        photo = self.get_photo(owner_key, photo_id)
        edit = _find_edit(photo, edit_id)
        if edit is None:
            raise NotFoundError("Edited version not found")
        edits = [item for item in photo.edit_history if item.id != edit.id]
        try:
            self.repository.save_edit_history(photo.id, edits)
        except Exception as exc:
            logger.exception(
                "Failed to remove edit", extra={"photo_id": str(photo.id)}
            )
            raise StoreFailureError("Failed to remove edit") from exc
        self._discard_asset(edit.asset)
        return replace(photo, edit_history=edits)

    def delete_photo(self, owner_key: str, photo_id: UUID) -> None:
        """Delete a photo, its original and every edited version."""
        photo = self.get_photo(owner_key, photo_id)
        try:
            self.repository.delete_photo(photo.id)
        except Exception as exc:
            logger.exception(
                "Failed to delete photo", extra={"photo_id": str(photo.id)}
            )
            raise StoreFailureError("Failed to delete photo") from exc
        self._discard_asset(photo.primary_asset)
        for edit in photo.edit_history:
            self._discard_asset(edit.asset)
        logger.info("Photo deleted", extra={"photo_id": str(photo.id)})

    def _store_asset(
        self, content: bytes, extension: str | None, folder: str
    ) -> StoredAsset:
        try:
            return self.asset_store.store(content, extension, folder)
        except Exception as exc:
            logger.exception("Failed to store asset", extra={"folder": folder})
            raise StoreFailureError("Failed to store image") from exc

    def _discard_asset(self, asset: StoredAsset) -> None:
        """Best-effort removal; the record store stays the source of truth."""
        if not asset.delete_handle:
            return
        try:
            self.asset_store.delete(asset.delete_handle)
        except Exception:
            logger.warning(
                "Failed to delete asset",
                extra={"delete_handle": asset.delete_handle},
                exc_info=True,
            )


def _find_edit(photo: Photo, edit_id: UUID | str) -> EditRecord | None:
    if not isinstance(edit_id, UUID):
        try:
            edit_id = UUID(edit_id)
        except ValueError:
            return None
    return photo.find_edit(edit_id)
