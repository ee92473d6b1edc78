"""Pointer document model — the mutable published/preview selection for an identity."""

from __future__ import annotations

from gutcheck_content.models.base import DocumentBase


class Pointer(DocumentBase):
    """One pointer per identity; ``id`` equals the identity id.

    Both revision ids being ``None`` is a valid state meaning the identity
    exists but nothing has been published yet.
    """

    published_revision_id: str | None = None
    preview_revision_id: str | None = None
    updated_by: str | None = None

    @property
    def identity_id(self) -> str:
        return self.id

    @property
    def is_empty(self) -> bool:
        return self.published_revision_id is None and self.preview_revision_id is None
