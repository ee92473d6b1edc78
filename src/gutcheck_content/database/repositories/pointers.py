"""Repository for the pointer containers (partitioned by /id, id == identity id)."""

from __future__ import annotations

from gutcheck_content.database.repositories.base import BaseRepository
from gutcheck_content.models.pointer import Pointer


class PointerRepository(BaseRepository[Pointer]):
    """Provide data access for published/preview pointers."""

    container_name = "question_set_pointers"
    model_class = Pointer

    async def get_for_identity(self, identity_id: str) -> Pointer | None:
        """Fetch the pointer for an identity, or None if none was ever created."""
        return await self.get(identity_id, identity_id)

    async def set_published(
        self, identity_id: str, revision_id: str, updated_by: str | None, *, clear_preview: bool = False
    ) -> Pointer:
        """Point the published slot at ``revision_id``, optionally clearing the preview slot."""
        pointer = await self.get_for_identity(identity_id) or Pointer(id=identity_id)
        pointer.published_revision_id = revision_id
        if clear_preview:
            pointer.preview_revision_id = None
        pointer.updated_by = updated_by
        return await self.upsert(pointer)

    async def set_preview(self, identity_id: str, revision_id: str | None, updated_by: str | None) -> Pointer:
        """Point the preview slot at ``revision_id``, or clear it with None."""
        pointer = await self.get_for_identity(identity_id) or Pointer(id=identity_id)
        pointer.preview_revision_id = revision_id
        pointer.updated_by = updated_by
        return await self.upsert(pointer)

    async def clear(self, identity_id: str, updated_by: str | None) -> Pointer:
        """Empty both slots; resolution then reports the identity as ``cms_empty``."""
        pointer = await self.get_for_identity(identity_id) or Pointer(id=identity_id)
        pointer.published_revision_id = None
        pointer.preview_revision_id = None
        pointer.updated_by = updated_by
        return await self.upsert(pointer)
