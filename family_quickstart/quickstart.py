"""
Family quickstart — basic CRUD and query walkthrough against Cosmos DB.

Runs, in order:
  1. create the database if it does not exist
  2. create the container if it does not exist (partition key /LastName)
  3. add the Adamski family (read first, create on 404) and upsert the Orlando family
  4. query the container for the Adamski family
  5. replace the Orlando family after updating two fields
  6. delete the Orlando family
  7. delete the database

Each step prints its outcome to stdout. Any service error other than the
404 from step 3's existence check propagates to the caller.
"""

from __future__ import annotations

import logging

from azure.cosmos.exceptions import CosmosResourceNotFoundError

from family_quickstart.config import Settings
from family_quickstart.models import PARTITION_KEY_PATH, Family
from family_quickstart.sample_data import adamski_family, orlando_family
from family_quickstart.stores import DocumentAccount, DocumentStore

logger = logging.getLogger("family-quickstart")

ADAMSKI_QUERY = "SELECT * FROM c WHERE c.LastName = 'Adamski'"


def _container(account: DocumentAccount, settings: Settings) -> DocumentStore:
    return account.get_container(settings.database_id, settings.container_id)


async def create_database(account: DocumentAccount, settings: Settings) -> str:
    """Create the database if it does not exist."""
    database_id = await account.ensure_database(settings.database_id)
    print(f"Created Database: {database_id}\n")
    return database_id


async def create_container(account: DocumentAccount, settings: Settings) -> DocumentStore:
    """Create the container if it does not exist.

    Family data is partitioned by last name to spread requests and storage.
    """
    container = await account.ensure_container(
        settings.database_id, settings.container_id, PARTITION_KEY_PATH,
    )
    print(f"Created Container: {container.id}\n")
    return container


async def add_items_to_container(
    account: DocumentAccount, settings: Settings,
) -> tuple[Family, Family]:
    """Add the Adamski and Orlando families; returns both as stored."""
    container = _container(account, settings)

    adamski = adamski_family()
    try:
        # Read the item to see if it exists
        doc = await container.get(adamski.id, adamski.last_name)
        adamski = Family.from_document(doc)
        print(f"Item in database with id: {adamski.id} already exists\n")
    except CosmosResourceNotFoundError:
        logger.debug("Item %s not found in partition %s, creating", adamski.id, adamski.last_name)
        doc = await container.create(adamski.to_document())
        adamski = Family.from_document(doc)
        print(f"Created item in database with id: {adamski.id}\n")

    # Upsert creates or fully replaces, no existence check needed
    doc = await container.upsert(orlando_family().to_document())
    orlando = Family.from_document(doc)
    print(f"Created item in database with id: {orlando.id}\n")

    return adamski, orlando


async def query_items(account: DocumentAccount, settings: Settings) -> list[Family]:
    """Run a Cosmos SQL query against the container."""
    print(f"Running query: {ADAMSKI_QUERY}\n")

    container = _container(account, settings)
    families: list[Family] = []
    for doc in await container.list(query=ADAMSKI_QUERY):
        family = Family.from_document(doc)
        families.append(family)
        print(f"\tRead {family}\n")
    logger.info("Query returned %d family(ies)", len(families))
    return families


async def replace_family_item(account: DocumentAccount, settings: Settings) -> Family:
    """Register the Orlando family and move its first child to grade 6."""
    container = _container(account, settings)

    family = Family.from_document(await container.get("Orlando.1983", "Orlando"))
    family.is_registered = True
    family.children[0].grade = 6

    doc = await container.replace(family.id, family.to_document())
    replaced = Family.from_document(doc)
    print(f"Updated Family [{family.last_name},{family.id}].\n \tBody is now: {replaced}\n")
    return replaced


async def delete_family_item(account: DocumentAccount, settings: Settings) -> None:
    """Delete the Orlando family. Both id and partition key are required."""
    container = _container(account, settings)

    partition_key_value = "Orlando"
    family_id = "Orlando.1983"
    await container.delete(family_id, partition_key_value)
    print(f"Deleted Family [{partition_key_value},{family_id}]\n")


async def delete_database_and_cleanup(account: DocumentAccount, settings: Settings) -> None:
    """Delete the database and everything in it."""
    await account.delete_database(settings.database_id)
    print(f"Deleted Database: {settings.database_id}\n")


async def run(account: DocumentAccount, settings: Settings) -> None:
    """Run every quickstart step in order against one account."""
    logger.info(
        "Starting quickstart against %s (database=%s, container=%s)",
        settings.backend_type, settings.database_id, settings.container_id,
    )
    await create_database(account, settings)
    await create_container(account, settings)
    await add_items_to_container(account, settings)
    await query_items(account, settings)
    await replace_family_item(account, settings)
    await delete_family_item(account, settings)
    await delete_database_and_cleanup(account, settings)
    logger.info("Quickstart complete")
