"""Repository modules for each Cosmos DB container."""

from gutcheck_content.database.repositories.audit import AuditLogRepository
from gutcheck_content.database.repositories.identities import IdentityRepository
from gutcheck_content.database.repositories.pointers import PointerRepository
from gutcheck_content.database.repositories.revisions import RevisionRepository

__all__ = [
    "AuditLogRepository",
    "IdentityRepository",
    "PointerRepository",
    "RevisionRepository",
]
