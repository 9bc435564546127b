"""Asset store backed by a Supabase Storage bucket."""

import mimetypes
from dataclasses import dataclass
from uuid import uuid4

from supabase import Client

from photo_editor.domain.photos import StoredAsset
from photo_editor.services.photos import AssetStore


@dataclass
class SupabaseAssetStore(AssetStore):
    """Uploads images to a public bucket and serves them by public URL."""

    client: Client
    bucket: str

    def store(self, content: bytes, extension: str | None, folder: str) -> StoredAsset:
        """Upload bytes under a fresh object path."""
        name = uuid4().hex
        if extension:
            name = f"{name}.{extension.lstrip('.').lower()}"
        path = f"{folder}/{name}"
        content_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(path=path, file=content, file_options={"content-type": content_type})
        return StoredAsset(locator=bucket.get_public_url(path), delete_handle=path)

    def delete(self, delete_handle: str) -> None:
        """Remove an object from the bucket."""
        self.client.storage.from_(self.bucket).remove([delete_handle])
