"""Revision document model — immutable content snapshots for a content identity."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import Field

from gutcheck_content.models.base import DocumentBase
from gutcheck_content.models.identity import ContentType


class RevisionStatus(StrEnum):
    """Lifecycle status of a revision."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


SCHEMA_VERSIONS: dict[ContentType, str] = {
    ContentType.QUESTION_SET: "v2_question_schema_1",
    ContentType.RESULTS_PACK: "v2_pack_schema_1",
}


class Revision(DocumentBase):
    """An immutable, numbered snapshot of a content document."""

    identity_id: str
    revision_number: int
    status: RevisionStatus = RevisionStatus.DRAFT
    schema_version: str
    content_json: dict[str, Any] = Field(default_factory=dict)
    content_hash: str
    change_summary: str | None = None
    created_by: str | None = None
