"""Per content type bundle of identity, pointer and revision repositories."""

from __future__ import annotations

from dataclasses import dataclass

from azure.cosmos.aio import DatabaseProxy

from gutcheck_content.database.repositories import (
    AuditLogRepository,
    IdentityRepository,
    PointerRepository,
    RevisionRepository,
)
from gutcheck_content.models.identity import ContentType

CONTAINERS: dict[ContentType, tuple[str, str, str]] = {
    ContentType.QUESTION_SET: ("question_sets", "question_set_pointers", "question_set_revisions"),
    ContentType.RESULTS_PACK: ("results_packs", "results_pack_pointers", "results_pack_revisions"),
}

AUDIT_CONTAINER = AuditLogRepository.container_name

ALL_CONTAINERS: tuple[str, ...] = (
    *(name for names in CONTAINERS.values() for name in names),
    AUDIT_CONTAINER,
)


@dataclass(frozen=True)
class ContentStore:
    content_type: ContentType
    identities: IdentityRepository
    pointers: PointerRepository
    revisions: RevisionRepository
    audit: AuditLogRepository

    @classmethod
    def for_content_type(cls, database: DatabaseProxy, content_type: ContentType) -> ContentStore:
        identities, pointers, revisions = CONTAINERS[content_type]
        return cls(
            content_type=content_type,
            identities=IdentityRepository(database, identities),
            pointers=PointerRepository(database, pointers),
            revisions=RevisionRepository(database, revisions),
            audit=AuditLogRepository(database),
        )
