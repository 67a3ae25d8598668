"""
CosmosDocumentAccount / CosmosDocumentStore — Cosmos DB NoSQL backend.

Thin wrappers over the azure.cosmos.aio proxies. The client is created
lazily on first use and shared by every container store of the account.
"""

from __future__ import annotations

import logging
from typing import Any

from azure.cosmos import PartitionKey
from azure.cosmos.aio import ContainerProxy, CosmosClient

from family_quickstart.config import Settings
from family_quickstart.cosmos_helpers import close_cosmos_client, get_cosmos_client

logger = logging.getLogger("family-quickstart.stores.cosmos")


class CosmosDocumentStore:
    """Cosmos NoSQL implementation of DocumentStore."""

    def __init__(self, container: ContainerProxy):
        self._container = container

    @property
    def id(self) -> str:
        return self._container.id

    async def list(
        self,
        *,
        query: str | None = None,
        parameters: list[dict[str, Any]] | None = None,
        partition_key: str | None = None,
    ) -> list[dict[str, Any]]:
        q = query or "SELECT * FROM c"
        kwargs: dict = {"query": q}
        if parameters:
            kwargs["parameters"] = parameters
        if partition_key:
            kwargs["partition_key"] = partition_key
        # AsyncItemPaged fetches further pages as iteration proceeds
        return [item async for item in self._container.query_items(**kwargs)]

    async def get(self, item_id: str, partition_key: str) -> dict[str, Any]:
        return await self._container.read_item(item=item_id, partition_key=partition_key)

    async def create(self, item: dict[str, Any]) -> dict[str, Any]:
        return await self._container.create_item(body=item)

    async def upsert(self, item: dict[str, Any]) -> dict[str, Any]:
        return await self._container.upsert_item(body=item)

    async def replace(self, item_id: str, item: dict[str, Any]) -> dict[str, Any]:
        return await self._container.replace_item(item=item_id, body=item)

    async def delete(self, item_id: str, partition_key: str) -> None:
        await self._container.delete_item(item=item_id, partition_key=partition_key)


class CosmosDocumentAccount:
    """Cosmos NoSQL implementation of DocumentAccount."""

    def __init__(self, settings: Settings, *, client: CosmosClient | None = None):
        self._settings = settings
        self._client = client

    @property
    def client(self) -> CosmosClient:
        if self._client is None:
            self._client = get_cosmos_client(self._settings)
        return self._client

    async def ensure_database(self, db_name: str) -> str:
        database = await self.client.create_database_if_not_exists(id=db_name)
        logger.debug("Database %s ready", database.id)
        return database.id

    async def ensure_container(
        self,
        db_name: str,
        container_name: str,
        partition_key_path: str,
    ) -> CosmosDocumentStore:
        database = self.client.get_database_client(db_name)
        container = await database.create_container_if_not_exists(
            id=container_name,
            partition_key=PartitionKey(path=partition_key_path),
        )
        logger.debug("Container %s/%s ready (pk=%s)", db_name, container.id, partition_key_path)
        return CosmosDocumentStore(container)

    def get_container(self, db_name: str, container_name: str) -> CosmosDocumentStore:
        container = self.client.get_database_client(db_name).get_container_client(container_name)
        return CosmosDocumentStore(container)

    async def delete_database(self, db_name: str) -> None:
        await self.client.delete_database(db_name)

    async def close(self) -> None:
        await close_cosmos_client(self._client)
        self._client = None
