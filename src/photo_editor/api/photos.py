"""Photo upload, listing, edit-history and deletion endpoints."""

from __future__ import annotations

from pathlib import PurePath
from uuid import UUID

from fastapi import APIRouter, Depends, File, Request, UploadFile

from photo_editor.api.deps import get_container, require_principal
from photo_editor.api.schemas import EditPhotoRequest, serialize_photo
from photo_editor.domain.errors import ForbiddenError, InvalidInputError
from photo_editor.domain.users import Principal  # noqa: TC001

router = APIRouter(tags=["photos"])


@router.post("/upload-photo")
async def upload_photo(
    request: Request,
    principal: Principal = Depends(require_principal),  # noqa: B008
    photo: UploadFile | None = File(default=None),  # noqa: B008
) -> dict[str, object]:
    """Store an uploaded original photo."""
    container = get_container(request)
    photo_service = container.photo_service
    content = None
    extension = None
    if photo is not None:
        extension = _upload_extension(photo)
        # One byte past the limit is enough to reject oversized uploads.
        content = await photo.read(photo_service.max_image_bytes + 1)
    created = photo_service.create_photo(principal.id, content, extension)
    return {"success": True, "photo": serialize_photo(created)}


@router.get("/my-photos")
async def my_photos(
    request: Request,
    principal: Principal = Depends(require_principal),  # noqa: B008
) -> dict[str, object]:
    """List the caller's photos."""
    container = get_container(request)
    photos = container.photo_service.list_photos(principal.id)
    return {"success": True, "photos": [serialize_photo(photo) for photo in photos]}


@router.delete("/photo/{photo_id}")
async def delete_photo(
    photo_id: str,
    request: Request,
    principal: Principal = Depends(require_principal),  # noqa: B008
) -> dict[str, object]:
    """Delete a photo with all of its edited versions."""
    container = get_container(request)
    container.photo_service.delete_photo(principal.id, _parse_photo_id(photo_id))
    return {"success": True}


@router.patch("/photo/{photo_id}/edit")
async def add_edit(
    photo_id: str,
    request: Request,
    body: EditPhotoRequest | None = None,
    principal: Principal = Depends(require_principal),  # noqa: B008
) -> dict[str, object]:
    """Append an edited version sent as a base64 data URL."""
    container = get_container(request)
    body = body or EditPhotoRequest()
    photo = container.photo_service.append_edit(
        principal.id, _parse_photo_id(photo_id), body.type, body.base64
    )
    return {"success": True, "photo": serialize_photo(photo)}


@router.delete("/photo/{photo_id}/edit/{edit_id}")
async def remove_edit(
    photo_id: str,
    edit_id: str,
    request: Request,
    principal: Principal = Depends(require_principal),  # noqa: B008
) -> dict[str, object]:
    """Remove one edited version from a photo's history."""
    container = get_container(request)
    photo = container.photo_service.remove_edit(
        principal.id, _parse_photo_id(photo_id), edit_id
    )
    return {"success": True, "photo": serialize_photo(photo)}


def _parse_photo_id(raw: str) -> UUID:
    """Malformed ids are treated like unknown ones."""
    try:
        return UUID(raw)
    except ValueError as exc:
        raise ForbiddenError("Not authorized") from exc


def _upload_extension(upload: UploadFile) -> str | None:
    """Extension hint from the file name, else from an image content type."""
    content_type = (upload.content_type or "").lower()
    if content_type and not content_type.startswith(
        ("image/", "application/octet-stream")
    ):
        raise InvalidInputError("Unsupported image type")
    suffix = PurePath(upload.filename or "").suffix.lstrip(".")
    if suffix:
        return suffix.lower()
    if content_type.startswith("image/"):
        return content_type.split("/", 1)[1].split(";", 1)[0].strip() or None
    return None
