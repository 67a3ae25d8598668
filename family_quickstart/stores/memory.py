"""
MemoryDocumentAccount — in-memory document store for offline runs and testing.

Accepts the same constructor signature as CosmosDocumentAccount and
raises the same azure.cosmos exceptions the service would, so callers
can't tell the backends apart on the error path.

Queries understand only what the quickstart issues:
    SELECT * FROM c
    SELECT * FROM c WHERE c.<Field> = '<literal>'
    SELECT * FROM c WHERE c.<Field> = @param
"""

from __future__ import annotations

import copy
import logging
import re
import time
import uuid
from typing import Any

from azure.cosmos.exceptions import (
    CosmosHttpResponseError,
    CosmosResourceExistsError,
    CosmosResourceNotFoundError,
)

from family_quickstart.config import Settings

logger = logging.getLogger("family-quickstart.stores.memory")

_QUERY_RE = re.compile(
    r"^\s*SELECT\s+\*\s+FROM\s+(?P<alias>\w+)"
    r"(?:\s+WHERE\s+(?P=alias)\.(?P<field>\w+)\s*=\s*(?:'(?P<literal>[^']*)'|(?P<param>@\w+)))?\s*$",
    re.IGNORECASE,
)


def _partition_value(item: dict[str, Any], pk_path: str) -> Any:
    """Resolve a partition key path such as "/LastName" against a document."""
    value: Any = item
    for part in pk_path.strip("/").split("/"):
        if not isinstance(value, dict) or part not in value:
            return None
        value = value[part]
    return value


class MemoryDocumentStore:
    """In-memory container keyed by (partition key value, id)."""

    def __init__(self, container_name: str, pk_path: str):
        self._id = container_name
        self._pk_path = pk_path
        self._items: dict[tuple[Any, str], dict[str, Any]] = {}

    @property
    def id(self) -> str:
        return self._id

    def _key(self, item: dict[str, Any]) -> tuple[Any, str]:
        if "id" not in item:
            raise CosmosHttpResponseError(
                status_code=400, message="The input content is invalid because the required property, 'id', is missing."
            )
        return (_partition_value(item, self._pk_path), item["id"])

    def _stamp(self, item: dict[str, Any]) -> dict[str, Any]:
        doc = copy.deepcopy(item)
        doc["_etag"] = f'"{uuid.uuid4()}"'
        doc["_ts"] = int(time.time())
        return doc

    def _not_found(self, item_id: str, partition_key: Any) -> CosmosResourceNotFoundError:
        return CosmosResourceNotFoundError(
            status_code=404,
            message=f"Entity with the specified id does not exist in the system. id={item_id} pk={partition_key}",
        )

    async def list(
        self,
        *,
        query: str | None = None,
        parameters: list[dict[str, Any]] | None = None,
        partition_key: str | None = None,
    ) -> list[dict[str, Any]]:
        items = list(self._items.values())
        if partition_key is not None:
            items = [i for i in items if _partition_value(i, self._pk_path) == partition_key]
        if query is None:
            return copy.deepcopy(items)

        match = _QUERY_RE.match(query)
        if match is None:
            raise CosmosHttpResponseError(status_code=400, message=f"Unsupported query: {query}")
        field = match.group("field")
        if field is not None:
            if match.group("param") is not None:
                values = {p["name"]: p["value"] for p in parameters or []}
                if match.group("param") not in values:
                    raise CosmosHttpResponseError(
                        status_code=400, message=f"Missing query parameter {match.group('param')}"
                    )
                expected = values[match.group("param")]
            else:
                expected = match.group("literal")
            items = [i for i in items if field in i and i[field] == expected]
        logger.debug("Query %r matched %d item(s)", query, len(items))
        return copy.deepcopy(items)

    async def get(self, item_id: str, partition_key: str) -> dict[str, Any]:
        try:
            return copy.deepcopy(self._items[(partition_key, item_id)])
        except KeyError:
            raise self._not_found(item_id, partition_key) from None

    async def create(self, item: dict[str, Any]) -> dict[str, Any]:
        key = self._key(item)
        if key in self._items:
            raise CosmosResourceExistsError(
                status_code=409, message=f"Entity with the specified id already exists in the system. id={key[1]}"
            )
        self._items[key] = self._stamp(item)
        return copy.deepcopy(self._items[key])

    async def upsert(self, item: dict[str, Any]) -> dict[str, Any]:
        key = self._key(item)
        self._items[key] = self._stamp(item)
        return copy.deepcopy(self._items[key])

    async def replace(self, item_id: str, item: dict[str, Any]) -> dict[str, Any]:
        key = self._key(item)
        if key[1] != item_id:
            raise CosmosHttpResponseError(
                status_code=400, message=f"Replace id {item_id} does not match body id {key[1]}"
            )
        if key not in self._items:
            raise self._not_found(item_id, key[0])
        self._items[key] = self._stamp(item)
        return copy.deepcopy(self._items[key])

    async def delete(self, item_id: str, partition_key: str) -> None:
        if self._items.pop((partition_key, item_id), None) is None:
            raise self._not_found(item_id, partition_key)


class MemoryDocumentAccount:
    """In-memory implementation of DocumentAccount."""

    def __init__(self, settings: Settings | None = None):
        self._databases: dict[str, dict[str, MemoryDocumentStore]] = {}

    def database_exists(self, db_name: str) -> bool:
        return db_name in self._databases

    async def ensure_database(self, db_name: str) -> str:
        if db_name not in self._databases:
            self._databases[db_name] = {}
            logger.debug("Created in-memory database %s", db_name)
        return db_name

    async def ensure_container(
        self,
        db_name: str,
        container_name: str,
        partition_key_path: str,
    ) -> MemoryDocumentStore:
        containers = self._database(db_name)
        if container_name not in containers:
            containers[container_name] = MemoryDocumentStore(container_name, partition_key_path)
            logger.debug("Created in-memory container %s/%s (pk=%s)", db_name, container_name, partition_key_path)
        return containers[container_name]

    def get_container(self, db_name: str, container_name: str) -> MemoryDocumentStore:
        containers = self._database(db_name)
        if container_name not in containers:
            raise CosmosResourceNotFoundError(
                status_code=404, message=f"Container {db_name}/{container_name} does not exist"
            )
        return containers[container_name]

    async def delete_database(self, db_name: str) -> None:
        self._database(db_name)
        del self._databases[db_name]

    async def close(self) -> None:
        pass

    def _database(self, db_name: str) -> dict[str, MemoryDocumentStore]:
        if db_name not in self._databases:
            raise CosmosResourceNotFoundError(status_code=404, message=f"Database {db_name} does not exist")
        return self._databases[db_name]
