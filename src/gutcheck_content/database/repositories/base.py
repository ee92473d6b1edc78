"""Generic repository over a single Cosmos DB container."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, ClassVar, Generic, TypeVar, cast

from azure.cosmos.aio import DatabaseProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from gutcheck_content.models.base import DocumentBase

T = TypeVar("T", bound=DocumentBase)


class BaseRepository(Generic[T]):
    """CRUD and query helpers shared by all repositories.

    ``container_name`` may be overridden per instance for content types that
    keep the same document shape in separate containers.
    """

    container_name: ClassVar[str]
    model_class: type[T]

    def __init__(self, database: DatabaseProxy, container_name: str | None = None) -> None:
        self._container = database.get_container_client(container_name or self.container_name)

    @staticmethod
    def _body(document: T) -> dict[str, Any]:
        return document.model_dump(mode="json")

    async def create(self, document: T) -> T:
        await self._container.create_item(body=self._body(document))
        return document

    async def get(self, item_id: str, partition_key: str) -> T | None:
        """Point read; a missing document returns None."""
        try:
            data = cast(
                "dict[str, Any]",
                await self._container.read_item(item=item_id, partition_key=partition_key),
            )
        except CosmosResourceNotFoundError:
            return None
        return self.model_class.model_validate(data)

    async def upsert(self, document: T) -> T:
        document.updated_at = datetime.now(UTC)
        await self._container.upsert_item(body=self._body(document))
        return document

    async def query(self, query: str, parameters: list[dict[str, Any]] | None = None) -> list[T]:
        return [
            self.model_class.model_validate(item)
            async for item in self._container.query_items(query=query, parameters=parameters or [])
        ]
