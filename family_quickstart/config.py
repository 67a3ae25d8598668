"""
Configuration — environment variable loading.

Centralises all env var reads so other modules import from here
instead of calling os.getenv() directly. Values may also be placed in
cosmos_config.env at the project root, which is loaded at import time.

Defaults target the local Cosmos DB emulator.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Project structure
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[1]
CONFIG_FILE = PROJECT_ROOT / "cosmos_config.env"

# Load config once at import time (before reading env vars that may be in the file)
load_dotenv(CONFIG_FILE)

# ---------------------------------------------------------------------------
# Cosmos DB NoSQL settings
# ---------------------------------------------------------------------------

# Well-known key of the local emulator, not a secret.
EMULATOR_KEY = (
    "C2y6yDjf5/R+ob0N8A7Cgv30VRDJIWEHLM+4QDU5DE2nQ9nDuVTqobD4b8mGGyPMbIZnqyMsEcaGQy67XIw/Jw=="
)

COSMOS_ENDPOINT = os.getenv("COSMOS_ENDPOINT", "https://localhost:8081/")
COSMOS_KEY = os.getenv("COSMOS_KEY", EMULATOR_KEY)
COSMOS_DATABASE = os.getenv("COSMOS_DATABASE", "FamilyDatabase")
COSMOS_CONTAINER = os.getenv("COSMOS_CONTAINER", "FamilyContainer")

# ---------------------------------------------------------------------------
# Runtime behaviour
# ---------------------------------------------------------------------------

DOCUMENT_STORE_BACKEND = os.getenv("DOCUMENT_STORE_BACKEND", "cosmosdb-nosql").lower()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings for one quickstart run."""
    endpoint: str
    key: str
    database_id: str
    container_id: str
    backend_type: str            # registered DocumentAccount name
    use_aad: bool = False        # DefaultAzureCredential instead of the key
    log_level: str = "INFO"
    pause_on_exit: bool = False


def load_settings() -> Settings:
    """Build Settings from the current environment.

    Module-level constants hold the values seen at import time; the flags
    are re-read here so callers (and tests) can override them with
    monkeypatched environment variables.
    """
    return Settings(
        endpoint=os.getenv("COSMOS_ENDPOINT", COSMOS_ENDPOINT),
        key=os.getenv("COSMOS_KEY", COSMOS_KEY),
        database_id=os.getenv("COSMOS_DATABASE", COSMOS_DATABASE),
        container_id=os.getenv("COSMOS_CONTAINER", COSMOS_CONTAINER),
        backend_type=os.getenv("DOCUMENT_STORE_BACKEND", DOCUMENT_STORE_BACKEND).lower(),
        use_aad=_env_flag("COSMOS_USE_AAD"),
        log_level=os.getenv("LOG_LEVEL", LOG_LEVEL).upper(),
        pause_on_exit=_env_flag("PAUSE_ON_EXIT"),
    )
