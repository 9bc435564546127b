"""Domain models for photos and their edit history."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class StoredAsset:
    """Where a stored image lives and how to remove it later."""

    locator: str
    delete_handle: str | None = None


@dataclass(frozen=True)
class EditRecord:
    """One derivative image produced by an edit."""

    id: UUID
    edit_kind: str
    asset: StoredAsset
    applied_at: datetime


@dataclass(frozen=True)
class Photo:
    """An uploaded original image with its ordered edit history."""

    id: UUID
    owner_key: str
    primary_asset: StoredAsset
    created_at: datetime
    edit_history: list[EditRecord] = field(default_factory=list)

    def find_edit(self, edit_id: UUID) -> EditRecord | None:
        """Return the edit with the given id, if present."""
        for edit in self.edit_history:
            if edit.id == edit_id:
                return edit
        return None
