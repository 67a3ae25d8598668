"""
Family quickstart entry point.

Usage:
    source cosmos_config.env   # or rely on the emulator defaults
    uv run python -m family_quickstart

    # Offline, against the in-memory store
    DOCUMENT_STORE_BACKEND=memory uv run family-quickstart
"""

from __future__ import annotations

import asyncio
import logging
import sys

from azure.cosmos.exceptions import CosmosHttpResponseError

from family_quickstart.config import Settings, load_settings
from family_quickstart.quickstart import run
from family_quickstart.stores import get_document_account

logger = logging.getLogger("family-quickstart")


def configure_logging(level: str) -> None:
    resolved = logging.getLevelName(level.upper())
    valid = isinstance(resolved, int)
    logging.basicConfig(
        level=resolved if valid else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not valid:
        logger.warning("Unknown LOG_LEVEL %r, using INFO", level)
    # The SDK logs every HTTP request at INFO
    logging.getLogger("azure").setLevel(logging.WARNING)


async def _main(settings: Settings) -> None:
    account = get_document_account(settings)
    try:
        await run(account, settings)
    finally:
        await account.close()


def main() -> int:
    settings = load_settings()
    configure_logging(settings.log_level)

    exit_code = 0
    try:
        asyncio.run(_main(settings))
    except CosmosHttpResponseError as e:
        logger.error("Cosmos request failed (status %s): %s", e.status_code, e.message)
        print(f"✗ {e.message}")
        exit_code = 1

    if settings.pause_on_exit:
        print("Click any key to exit...")
        input()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
