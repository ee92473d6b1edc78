"""Audit log entry model — one append-only record per admin write."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from gutcheck_content.models.base import DocumentBase


class AuditEntry(DocumentBase):
    actor_id: str | None = None
    action: str
    entity_type: str
    entity_id: str
    metadata: dict[str, Any] = Field(default_factory=dict)
