"""Asset store on the local filesystem."""

from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from photo_editor.domain.photos import StoredAsset
from photo_editor.services.photos import AssetStore


@dataclass
class LocalAssetStore(AssetStore):
    """Writes images below a base directory served under a URL prefix."""

    base_dir: Path
    url_prefix: str = "/uploads"

    def store(self, content: bytes, extension: str | None, folder: str) -> StoredAsset:
        """Write bytes to a fresh file and return its public path."""
        filename = uuid4().hex
        if extension:
            filename = f"{filename}.{extension.lstrip('.').lower()}"
        relative = f"{folder}/{filename}"
        target = self._resolve(relative)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        return StoredAsset(
            locator=f"{self.url_prefix.rstrip('/')}/{relative}",
            delete_handle=relative,
        )

    def delete(self, delete_handle: str) -> None:
        """Remove a stored file; a file that is already gone is not an error."""
        self._resolve(delete_handle).unlink(missing_ok=True)

    def _resolve(self, relative: str) -> Path:
        root = self.base_dir.resolve()
        candidate = (root / relative).resolve()
        if root not in candidate.parents:
            raise ValueError(f"Invalid storage key: {relative}")
        return candidate
