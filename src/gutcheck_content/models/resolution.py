"""Resolution results and the content reference used for pinning."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from gutcheck_content.models.documents import ContentDocument
from gutcheck_content.models.identity import ContentKey, ContentType, normalize_locale, normalize_version


class UserRole(StrEnum):
    USER = "user"
    EDITOR = "editor"
    ADMIN = "admin"


PREVIEW_ROLES = frozenset({UserRole.EDITOR, UserRole.ADMIN})


def can_preview(preview: bool, user_role: UserRole | str | None) -> bool:
    """Preview is honored only when explicitly requested by an editor or admin."""
    return preview is True and user_role in PREVIEW_ROLES


class RefSource(StrEnum):
    CMS = "cms"
    FILE = "file"


class ResolutionSource(StrEnum):
    CMS = "cms"
    FILE = "file"
    CMS_EMPTY = "cms_empty"


class ContentRef(BaseModel):
    """Serializable record of how a document was resolved.

    Persisting this alongside a session lets a later resolution reproduce
    the same revision even after the pointer has moved.
    """

    source: RefSource
    content_type: ContentType
    assessment_type: str
    version: str
    locale: str | None = None
    level_id: str | None = None
    identity_id: str | None = None
    published_revision_id: str | None = None
    preview_revision_id: str | None = None
    content_hash: str | None = None
    resolved_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("version", mode="before")
    @classmethod
    def _version(cls, value: str | int) -> str:
        return normalize_version(value)

    @field_validator("locale", mode="before")
    @classmethod
    def _locale(cls, value: str | None) -> str | None:
        return normalize_locale(value)

    @classmethod
    def for_key(cls, key: ContentKey, source: RefSource, **fields: Any) -> ContentRef:
        return cls(
            source=source,
            content_type=key.content_type,
            assessment_type=key.assessment_type,
            version=key.version,
            locale=key.locale,
            level_id=key.level_id,
            **fields,
        )

    def matches_key(self, key: ContentKey) -> bool:
        return (
            self.content_type == key.content_type
            and self.assessment_type == key.assessment_type
            and self.version == key.version
            and self.locale == key.locale
            and self.level_id == key.level_id
        )

    def pinned_revision_id(self, *, allow_preview: bool) -> str | None:
        """Revision to pin to; preview revisions are only honored for preview roles."""
        if self.source != RefSource.CMS:
            return None
        if self.published_revision_id:
            return self.published_revision_id
        if allow_preview and self.preview_revision_id:
            return self.preview_revision_id
        return None


class ResolveResult(BaseModel):
    """Document plus provenance returned to rendering and API callers."""

    document: ContentDocument | None = None
    source: ResolutionSource
    content_hash: str | None = None
    schema_version: str | None = None
    published_at: datetime | None = None
    is_preview: bool | None = None
    ref: ContentRef | None = None
    identity_id: str | None = None

    @property
    def revision_id(self) -> str | None:
        if self.ref is None:
            return None
        return self.ref.published_revision_id or self.ref.preview_revision_id

    def to_response(self) -> dict[str, Any]:
        """JSON body for API responses."""
        return {
            "document": self.document.to_json() if self.document is not None else None,
            "source": self.source.value,
            "identity_id": self.identity_id,
            "revision_id": self.revision_id,
            "content_hash": self.content_hash,
            "schema_version": self.schema_version,
            "published_at": self.published_at.isoformat() if self.published_at else None,
            "is_preview": self.is_preview,
            "ref": self.ref.model_dump(mode="json") if self.ref else None,
        }
