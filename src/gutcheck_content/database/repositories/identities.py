"""Repository for the identity containers (partitioned by /id)."""

from __future__ import annotations

from typing import Any

from gutcheck_content.database.repositories.base import BaseRepository
from gutcheck_content.models.identity import ContentIdentity, ContentKey


def _nullable_clause(field: str, value: str | None, params: list[dict[str, Any]]) -> str:
    """Equality when ``value`` is set, otherwise a null test that also matches an absent field."""
    if value is None:
        return f"(IS_NULL(c.{field}) OR NOT IS_DEFINED(c.{field}))"
    params.append({"name": f"@{field}", "value": value})
    return f"c.{field} = @{field}"


class IdentityRepository(BaseRepository[ContentIdentity]):
    """Provide data access for question set and results pack identities."""

    container_name = "question_sets"
    model_class = ContentIdentity

    async def find(self, key: ContentKey) -> ContentIdentity | None:
        """Fetch the identity matching ``key`` exactly, including a null locale."""
        params: list[dict[str, Any]] = [
            {"name": "@content_type", "value": key.content_type.value},
            {"name": "@assessment_type", "value": key.assessment_type},
            {"name": "@version", "value": key.version},
        ]
        clauses = [
            "c.content_type = @content_type",
            "c.assessment_type = @assessment_type",
            "c.version = @version",
            _nullable_clause("locale", key.locale, params),
            _nullable_clause("level_id", key.level_id, params),
        ]
        results = await self.query("SELECT * FROM c WHERE " + " AND ".join(clauses), params)
        return results[0] if results else None
