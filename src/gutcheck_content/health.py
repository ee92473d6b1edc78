"""Pre-flight and liveness checks for the Cosmos DB dependency."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

import httpx

from gutcheck_content.resolver.attempt import attempt

if TYPE_CHECKING:
    from azure.cosmos.aio import DatabaseProxy

    from gutcheck_content.config import Settings

logger = logging.getLogger(__name__)


async def check_emulators(settings: Settings) -> bool:
    """Verify the local Cosmos DB emulator is reachable. Return False if it is down."""
    failures: list[str] = []
    cosmos_url = settings.cosmos.endpoint
    if not cosmos_url:
        failures.append("COSMOS_ENDPOINT is not set — add it to .env (see .env.example)")
    elif not cosmos_url.startswith("https://"):
        async with httpx.AsyncClient(timeout=3) as client:
            try:
                await client.get(f"{cosmos_url.rstrip('/')}/")
            except httpx.ConnectError:
                parsed = urlparse(cosmos_url)
                failures.append(f"Cosmos DB emulator is not running at {parsed.netloc}")

    if failures:
        for failure in failures:
            logger.error(failure)
        logger.error("Start the emulator with: docker compose up -d")
        return False
    return True


async def check_database(database: DatabaseProxy) -> dict[str, Any]:
    """Report whether the content database answers a metadata read.

    The service still serves bundled content when this fails.
    """
    properties = await attempt("database", database.read())
    if properties is None:
        return {"name": "cosmos", "status": "degraded", "detail": "falling back to bundled content"}
    return {"name": "cosmos", "status": "healthy"}
