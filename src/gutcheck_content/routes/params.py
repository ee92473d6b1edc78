"""Query parameter parsing and per-request wiring shared by the content routes."""

from __future__ import annotations

import logging

from fastapi import Request
from pydantic import ValidationError

from gutcheck_content.database.store import ContentStore
from gutcheck_content.models.identity import ContentType
from gutcheck_content.models.resolution import ContentRef

logger = logging.getLogger(__name__)

DEFAULT_VERSION = 2
MIN_VERSION = 1
MAX_VERSION = 99

_TRUTHY = frozenset({"1", "true", "yes"})


def parse_version(raw: str | None, default: int = DEFAULT_VERSION) -> int:
    """Parse a version query value, falling back to ``default`` outside 1-99.

    A leading ``v`` is accepted, so ``"v2"`` parses as 2.
    """
    if not raw:
        return default
    text = raw.strip().removeprefix("v").removeprefix("V")
    try:
        value = int(text)
    except ValueError:
        return default
    if value < MIN_VERSION or value > MAX_VERSION:
        return default
    return value


def parse_flag(raw: str | None) -> bool:
    return raw is not None and raw.strip().lower() in _TRUTHY


def parse_pinned_ref(raw: str | None) -> ContentRef | None:
    """Decode a JSON content reference; malformed references are ignored."""
    if not raw:
        return None
    try:
        return ContentRef.model_validate_json(raw)
    except ValidationError:
        logger.info("Ignoring malformed pinned content reference")
        return None


def get_store(request: Request, content_type: ContentType) -> ContentStore:
    return ContentStore.for_content_type(request.app.state.cosmos.database, content_type)
