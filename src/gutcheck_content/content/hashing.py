"""Canonical serialization and SHA-256 content hashing."""

from __future__ import annotations

import hashlib
import json
from typing import Any

from pydantic import BaseModel

from gutcheck_content.models.documents import ContentModel


def canonical_json(content: Any) -> str:
    """Serialize with keys sorted at every depth and no insignificant whitespace.

    Models are dumped to their wire shape first; explicit nulls are part of
    the content and are hashed.
    """
    if isinstance(content, ContentModel):
        content = content.to_json()
    elif isinstance(content, BaseModel):
        content = content.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return json.dumps(content, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def hash_content(content: Any) -> str:
    """Return the hex SHA-256 digest of the canonical form of ``content``."""
    return hashlib.sha256(canonical_json(content).encode("utf-8")).hexdigest()
