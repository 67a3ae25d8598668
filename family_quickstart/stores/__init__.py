"""
DocumentStore — backend-agnostic document CRUD + query protocol.

Provides:
  - DocumentStore Protocol (container-level point operations + query)
  - DocumentAccount Protocol (database/container lifecycle)
  - Registry + factory function (get_document_account)
  - Auto-registers the Cosmos DB NoSQL and in-memory backends on import

Usage:
    from family_quickstart.stores import get_document_account

    account = get_document_account(settings)
    await account.ensure_database("FamilyDatabase")
    store = await account.ensure_container("FamilyDatabase", "FamilyContainer", "/LastName")
    items = await store.list(query="SELECT * FROM c WHERE c.LastName = 'Adamski'")

Both backends signal failures with azure.cosmos.exceptions, so a missing
record is always a CosmosResourceNotFoundError regardless of backend.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from family_quickstart.config import Settings


@runtime_checkable
class DocumentStore(Protocol):
    """Backend-agnostic document CRUD + query interface for one container."""

    @property
    def id(self) -> str:
        """Container id."""
        ...

    async def list(
        self,
        *,
        query: str | None = None,
        parameters: list[dict[str, Any]] | None = None,
        partition_key: str | None = None,
    ) -> list[dict[str, Any]]:
        """List/query documents, draining every result page. If query is None, return all.

        Args:
            query: Cosmos SQL query string (e.g. "SELECT * FROM c WHERE c.x = @x")
            parameters: Parameterized query values (e.g. [{"name": "@x", "value": 1}]).
            partition_key: Scope query to a single partition (avoids cross-partition cost).
        """
        ...

    async def get(self, item_id: str, partition_key: str) -> dict[str, Any]:
        """Point-read a document by ID + partition key."""
        ...

    async def create(self, item: dict[str, Any]) -> dict[str, Any]:
        """Create a document; fails with a conflict if it already exists."""
        ...

    async def upsert(self, item: dict[str, Any]) -> dict[str, Any]:
        """Insert or fully replace a document."""
        ...

    async def replace(self, item_id: str, item: dict[str, Any]) -> dict[str, Any]:
        """Replace an existing document. The partition key is taken from the body."""
        ...

    async def delete(self, item_id: str, partition_key: str) -> None:
        """Delete a document by ID + partition key."""
        ...


@runtime_checkable
class DocumentAccount(Protocol):
    """Database and container lifecycle for one account."""

    async def ensure_database(self, db_name: str) -> str:
        """Create the database if absent; return its id."""
        ...

    async def ensure_container(
        self,
        db_name: str,
        container_name: str,
        partition_key_path: str,
    ) -> DocumentStore:
        """Create the container if absent; return a store bound to it."""
        ...

    def get_container(self, db_name: str, container_name: str) -> DocumentStore:
        """Return a store for an existing container (no service call)."""
        ...

    async def delete_database(self, db_name: str) -> None:
        """Delete the database and everything in it."""
        ...

    async def close(self) -> None:
        ...


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_document_account_registry: dict[str, type] = {}


def register_document_account(name: str, cls: type) -> None:
    """Register a DocumentAccount implementation by name."""
    _document_account_registry[name] = cls


def get_document_account(
    settings: Settings,
    *,
    backend_type: str | None = None,
) -> DocumentAccount:
    """Factory that returns the appropriate DocumentAccount implementation.

    Args:
        settings: Resolved runtime settings (endpoint, credentials, ...).
        backend_type: Override backend. Defaults to settings.backend_type.
                      Must match a registered name.
    """
    bt = backend_type or settings.backend_type
    if bt not in _document_account_registry:
        raise ValueError(
            f"Unknown document store: {bt}. "
            f"Available: {list(_document_account_registry)}"
        )
    return _document_account_registry[bt](settings)


# ---------------------------------------------------------------------------
# Auto-register at module load
# ---------------------------------------------------------------------------

from .cosmos_nosql import CosmosDocumentAccount  # noqa: E402
from .memory import MemoryDocumentAccount  # noqa: E402

register_document_account("cosmosdb-nosql", CosmosDocumentAccount)
register_document_account("memory", MemoryDocumentAccount)
