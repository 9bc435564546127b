"""Decoding of inline (data URL) image payloads."""

import base64
import binascii
import re
from dataclasses import dataclass

from photo_editor.domain.errors import InvalidInputError

# Raster formats only; the uploads mount serves files by extension.
IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "webp", "bmp"})

_DATA_URL_PATTERN = re.compile(
    r"data:(?P<type>[\w.+-]+)/(?P<subtype>[\w.+-]+);base64,(?P<payload>.+)",
    re.DOTALL | re.ASCII,
)

_INVALID_MESSAGE = "Invalid base64 image data"
_UNSUPPORTED_MESSAGE = "Unsupported image type"
_TOO_LARGE_MESSAGE = "Image too large"


@dataclass(frozen=True)
class InlineImage:
    """Raw bytes decoded from a data URL plus the media type they declared."""

    media_type: str
    extension: str
    content: bytes


def image_extension(value: str) -> str:
    """Normalize an extension hint, rejecting anything but known image formats."""
    extension = value.strip().lstrip(".").lower()
    if extension not in IMAGE_EXTENSIONS:
        raise InvalidInputError(_UNSUPPORTED_MESSAGE)
    return extension


def decode_data_url(value: str, max_bytes: int | None = None) -> InlineImage:
    """Decode `data:image/<subtype>;base64,<payload>` into raw bytes."""
    match = _DATA_URL_PATTERN.fullmatch(value.strip())
    if match is None:
        raise InvalidInputError(_INVALID_MESSAGE)
    if match.group("type").lower() != "image":
        raise InvalidInputError(_UNSUPPORTED_MESSAGE)
    extension = image_extension(match.group("subtype"))
    payload = "".join(match.group("payload").split())
    if max_bytes is not None and len(payload) > 4 * ((max_bytes + 2) // 3):
        raise InvalidInputError(_TOO_LARGE_MESSAGE)
    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError(_INVALID_MESSAGE) from exc
    if not content:
        raise InvalidInputError(_INVALID_MESSAGE)
    if max_bytes is not None and len(content) > max_bytes:
        raise InvalidInputError(_TOO_LARGE_MESSAGE)
    return InlineImage(
        media_type=f"image/{extension}",
        extension=extension,
        content=content,
    )
