"""Repository for the revision containers (partitioned by /id)."""

from __future__ import annotations

from gutcheck_content.database.repositories.base import BaseRepository
from gutcheck_content.models.revision import Revision, RevisionStatus


class RevisionRepository(BaseRepository[Revision]):
    """Provide data access for immutable content revisions."""

    container_name = "question_set_revisions"
    model_class = Revision

    async def get_by_id(self, revision_id: str) -> Revision | None:
        return await self.get(revision_id, revision_id)

    async def list_by_identity(self, identity_id: str) -> list[Revision]:
        """Fetch all revisions for an identity, newest first."""
        return await self.query(
            "SELECT * FROM c WHERE c.identity_id = @identity_id ORDER BY c.revision_number DESC",
            [{"name": "@identity_id", "value": identity_id}],
        )

    async def get_latest(self, identity_id: str) -> Revision | None:
        """Fetch the highest-numbered revision for an identity."""
        results = await self.query(
            "SELECT TOP 1 * FROM c WHERE c.identity_id = @identity_id ORDER BY c.revision_number DESC",
            [{"name": "@identity_id", "value": identity_id}],
        )
        return results[0] if results else None

    async def set_status(self, revision: Revision, status: RevisionStatus) -> Revision:
        """Record a lifecycle change. Content and hash are never rewritten."""
        revision.status = status
        return await self.upsert(revision)
