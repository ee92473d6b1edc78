"""Service initialization helpers used by the application lifespan."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from azure.core.exceptions import AzureError

from gutcheck_content.database.client import CosmosClient
from gutcheck_content.database.store import ALL_CONTAINERS
from gutcheck_content.health import check_emulators

if TYPE_CHECKING:
    from gutcheck_content.config import Settings

logger = logging.getLogger(__name__)


async def init_database(settings: Settings) -> CosmosClient:
    """Create the Cosmos client; in development also provision the content containers.

    A failed provisioning is logged and the client is still returned, so
    resolution degrades to bundled content instead of refusing to start.
    """
    cosmos = CosmosClient(settings.cosmos)
    await cosmos.initialize()

    if settings.app.is_development and await check_emulators(settings):
        try:
            await cosmos.ensure_containers(ALL_CONTAINERS)
        except (AzureError, OSError):
            logger.exception("Unable to provision Cosmos DB containers — serving bundled content only")

    logger.info("Cosmos DB client ready — database=%s", settings.cosmos.database)
    return cosmos
