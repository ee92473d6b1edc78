"""Repository for the shared content audit log container (partitioned by /id)."""

from __future__ import annotations

from typing import Any

from gutcheck_content.database.repositories.base import BaseRepository
from gutcheck_content.models.audit import AuditEntry


class AuditLogRepository(BaseRepository[AuditEntry]):
    """Append admin actions to the audit log."""

    container_name = "content_audit_log"
    model_class = AuditEntry

    async def record(
        self,
        actor_id: str | None,
        action: str,
        entity_type: str,
        entity_id: str,
        metadata: dict[str, Any] | None = None,
    ) -> AuditEntry:
        entry = AuditEntry(
            actor_id=actor_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            metadata=metadata or {},
        )
        return await self.create(entry)

    async def list_for_entity(self, entity_id: str) -> list[AuditEntry]:
        """Fetch an entity's audit trail, newest first."""
        return await self.query(
            "SELECT * FROM c WHERE c.entity_id = @entity_id ORDER BY c.created_at DESC",
            [{"name": "@entity_id", "value": entity_id}],
        )
