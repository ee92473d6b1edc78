"""Uniform failure policy for content store lookups."""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TypeVar

from azure.core.exceptions import AzureError

logger = logging.getLogger(__name__)

T = TypeVar("T")

STORE_ERRORS: tuple[type[Exception], ...] = (AzureError, OSError)


async def attempt(step: str, operation: Awaitable[T], *, failures: list[str] | None = None) -> T | None:
    """Await a store lookup, turning infrastructure errors into a miss.

    Only ``AzureError`` and ``OSError`` are absorbed. Cancellation and any
    other exception propagate. The failed step name is appended to
    ``failures`` when given so callers can report what was unavailable.
    """
    try:
        return await operation
    except STORE_ERRORS:
        logger.warning("Content store lookup failed — step=%s", step, exc_info=True)
        if failures is not None:
            failures.append(step)
        return None
