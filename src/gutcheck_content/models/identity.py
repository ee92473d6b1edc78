"""Content identity: the immutable (type, assessment, version, locale/level) slot."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator

from gutcheck_content.models.base import DocumentBase


class ContentType(StrEnum):
    QUESTION_SET = "question_set"
    RESULTS_PACK = "results_pack"


class IdentityStatus(StrEnum):
    ACTIVE = "active"
    ARCHIVED = "archived"


def normalize_version(value: str | int) -> str:
    """Canonicalize a version so ``2``, ``"2"`` and ``"v2"`` name the same slot."""
    text = str(value).strip()
    if len(text) > 1 and text[0] in "vV" and text[1:].isdigit():
        return text[1:]
    return text


def normalize_locale(value: str | None) -> str | None:
    """Collapse ``None`` and blank strings into the single "no locale" value."""
    if value is None:
        return None
    text = value.strip()
    return text or None


class ContentKey(BaseModel):
    """Lookup key naming one content slot.

    ``locale=None`` is a concrete value matched with a null test, never a
    wildcard. ``level_id`` is only meaningful for results packs.
    """

    model_config = ConfigDict(frozen=True)

    content_type: ContentType
    assessment_type: str
    version: str
    locale: str | None = None
    level_id: str | None = None

    @field_validator("version", mode="before")
    @classmethod
    def _version(cls, value: str | int) -> str:
        return normalize_version(value)

    @field_validator("locale", mode="before")
    @classmethod
    def _locale(cls, value: str | None) -> str | None:
        return normalize_locale(value)

    @classmethod
    def question_set(
        cls, assessment_type: str, version: str | int, locale: str | None = None
    ) -> ContentKey:
        return cls(
            content_type=ContentType.QUESTION_SET,
            assessment_type=assessment_type,
            version=version,
            locale=locale,
        )

    @classmethod
    def results_pack(cls, assessment_type: str, version: str | int, level_id: str) -> ContentKey:
        return cls(
            content_type=ContentType.RESULTS_PACK,
            assessment_type=assessment_type,
            version=version,
            level_id=level_id,
        )

    def describe(self) -> str:
        """Human-readable label used in log lines and error messages."""
        label = f"{self.assessment_type} v{self.version}"
        if self.level_id:
            label += f" {self.level_id}"
        if self.locale:
            label += f" ({self.locale})"
        return f"{self.content_type.value.replace('_', ' ')} {label}"


class ContentIdentity(DocumentBase):
    """Stored identity row; created once by the scaffold action.

    The key fields never change. Only ``status`` moves, between active and
    archived.
    """

    content_type: ContentType
    assessment_type: str
    version: str
    locale: str | None = None
    level_id: str | None = None
    status: IdentityStatus = IdentityStatus.ACTIVE

    @property
    def slug(self) -> str:
        slug = f"{self.assessment_type}:{self.version}:{self.locale or 'default'}"
        if self.level_id:
            slug += f":{self.level_id}"
        return slug

    @classmethod
    def from_key(cls, key: ContentKey) -> ContentIdentity:
        return cls(
            content_type=key.content_type,
            assessment_type=key.assessment_type,
            version=key.version,
            locale=key.locale,
            level_id=key.level_id,
        )
