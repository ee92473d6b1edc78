"""Data models for stored documents, content documents and resolution results."""

from gutcheck_content.models.documents import (
    ContentDocument,
    QuestionSetDocument,
    ResultsPackDocument,
    ResultsPackFlowDocument,
    ResultsPackLegacyDocument,
)
from gutcheck_content.models.audit import AuditEntry
from gutcheck_content.models.identity import ContentIdentity, ContentKey, ContentType, IdentityStatus
from gutcheck_content.models.pointer import Pointer
from gutcheck_content.models.resolution import (
    ContentRef,
    RefSource,
    ResolutionSource,
    ResolveResult,
    UserRole,
    can_preview,
)
from gutcheck_content.models.revision import SCHEMA_VERSIONS, Revision, RevisionStatus

__all__ = [
    "SCHEMA_VERSIONS",
    "AuditEntry",
    "ContentDocument",
    "ContentIdentity",
    "ContentKey",
    "ContentRef",
    "ContentType",
    "IdentityStatus",
    "Pointer",
    "QuestionSetDocument",
    "RefSource",
    "ResolutionSource",
    "ResolveResult",
    "ResultsPackDocument",
    "ResultsPackFlowDocument",
    "ResultsPackLegacyDocument",
    "Revision",
    "RevisionStatus",
    "UserRole",
    "can_preview",
]
