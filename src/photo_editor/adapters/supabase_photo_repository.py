"""Supabase-backed photo repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from photo_editor.domain.errors import StoreFailureError
from photo_editor.domain.photos import EditRecord, Photo, StoredAsset
from photo_editor.services.photos import PhotoRepository

_COLUMNS = "id, owner, image_url, image_handle, edited_versions, created_at"


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation storing each photo as one row.

    The edit history lives in the `edited_versions` jsonb column so that a
    photo and its edits are written atomically as a single row.
    """

    client: Client

    def create_photo(self, owner_key: str, primary_asset: StoredAsset) -> Photo:
        """Insert a photo row and return it."""
        response = (
            self.client.table("photos")
            .insert(
                {
                    "owner": owner_key,
                    "image_url": primary_asset.locator,
                    "image_handle": primary_asset.delete_handle,
                    "edited_versions": [],
                }
            )
            .execute()
        )
        if not response.data:
            raise StoreFailureError("Failed to create photo")
        return _photo_from_row(response.data[0])

    def get_photo(self, photo_id: UUID) -> Photo | None:
        """Return a photo by id, if present."""
        response = (
            self.client.table("photos")
            .select(_COLUMNS)
            .eq("id", str(photo_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _photo_from_row(response.data[0])

    def list_photos(self, owner_key: str) -> list[Photo]:
        """Return the owner's photos oldest first."""
        response = (
            self.client.table("photos")
            .select(_COLUMNS)
            .eq("owner", owner_key)
            .order("created_at")
            .execute()
        )
        return [_photo_from_row(row) for row in response.data or []]

    def save_edit_history(self, photo_id: UUID, edits: list[EditRecord]) -> None:
        """Overwrite the edited_versions column."""
        response = (
            self.client.table("photos")
            .update({"edited_versions": [_edit_to_json(edit) for edit in edits]})
            .eq("id", str(photo_id))
            .execute()
        )
        if not response.data:
            raise StoreFailureError("Failed to update photo")

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo row."""
        self.client.table("photos").delete().eq("id", str(photo_id)).execute()


def _photo_from_row(row: dict) -> Photo:
    return Photo(
        id=UUID(row["id"]),
        owner_key=row["owner"],
        primary_asset=StoredAsset(
            locator=row["image_url"], delete_handle=row.get("image_handle")
        ),
        created_at=datetime.fromisoformat(row["created_at"]),
        edit_history=[
            _edit_from_json(item) for item in row.get("edited_versions") or []
        ],
    )


def _edit_to_json(edit: EditRecord) -> dict[str, object]:
    return {
        "id": str(edit.id),
        "type": edit.edit_kind,
        "url": edit.asset.locator,
        "handle": edit.asset.delete_handle,
        "date": edit.applied_at.isoformat(),
    }


def _edit_from_json(item: dict) -> EditRecord:
    return EditRecord(
        id=UUID(item["id"]),
        edit_kind=item["type"],
        asset=StoredAsset(locator=item["url"], delete_handle=item.get("handle")),
        applied_at=datetime.fromisoformat(item["date"]),
    )
