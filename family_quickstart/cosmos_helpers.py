"""
Cosmos client helper — the single long-lived async CosmosClient.

The quickstart acquires one client at startup and closes it at exit.
Authenticates with the account key by default, or with
DefaultAzureCredential when COSMOS_USE_AAD is set.
"""

from __future__ import annotations

import logging

from azure.cosmos.aio import CosmosClient

from family_quickstart.config import Settings

logger = logging.getLogger("family-quickstart.cosmos")

# ---------------------------------------------------------------------------
# Shared credential (lazy-initialised to avoid probing at import time)
# ---------------------------------------------------------------------------

_credential = None


def get_credential():
    """Return a cached async DefaultAzureCredential (lazy-initialised)."""
    global _credential
    if _credential is None:
        from azure.identity.aio import DefaultAzureCredential
        _credential = DefaultAzureCredential()
    return _credential


async def close_credential() -> None:
    global _credential
    if _credential is not None:
        await _credential.close()
        _credential = None


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


def get_cosmos_client(settings: Settings) -> CosmosClient:
    """Create the data-plane CosmosClient for the configured account.

    Raises RuntimeError if no endpoint is configured.
    """
    if not settings.endpoint:
        raise RuntimeError("COSMOS_ENDPOINT not configured")
    if settings.use_aad:
        credential = get_credential()
        auth = "DefaultAzureCredential"
    else:
        if not settings.key:
            raise RuntimeError("COSMOS_KEY not configured (or set COSMOS_USE_AAD=true)")
        credential = settings.key
        auth = "account key"
    logger.debug("Creating CosmosClient for %s (%s)", settings.endpoint, auth)
    return CosmosClient(url=settings.endpoint, credential=credential)


async def close_cosmos_client(client: CosmosClient | None) -> None:
    """Close the client and any cached credential."""
    if client is not None:
        await client.close()
    await close_credential()
