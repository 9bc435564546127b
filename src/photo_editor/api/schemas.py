"""Request bodies and JSON serializers for the HTTP API."""

from pydantic import BaseModel

from photo_editor.domain.photos import EditRecord, Photo
from photo_editor.domain.users import Principal


class EditPhotoRequest(BaseModel):
    """Body of PATCH /photo/{id}/edit."""

    type: str | None = None
    base64: str | None = None


def serialize_photo(photo: Photo) -> dict[str, object]:
    return {
        "id": str(photo.id),
        "owner": photo.owner_key,
        "imageUrl": photo.primary_asset.locator,
        "editedVersions": [_serialize_edit(edit) for edit in photo.edit_history],
        "createdAt": photo.created_at.isoformat(),
    }


def serialize_principal(principal: Principal) -> dict[str, object]:
    return {
        "id": principal.id,
        "name": principal.name,
        "email": principal.email,
        "photo": principal.photo,
    }


def _serialize_edit(edit: EditRecord) -> dict[str, object]:
    return {
        "id": str(edit.id),
        "type": edit.edit_kind,
        "url": edit.asset.locator,
        "date": edit.applied_at.isoformat(),
    }
