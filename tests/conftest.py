"""Shared fixtures: in-memory account and a call-recording container wrapper."""

from __future__ import annotations

from collections import Counter
from typing import Any

import pytest

from family_quickstart.config import Settings
from family_quickstart.models import PARTITION_KEY_PATH
from family_quickstart.stores.memory import MemoryDocumentAccount, MemoryDocumentStore


class RecordingStore:
    """Wraps a MemoryDocumentStore and counts calls per operation."""

    def __init__(self, inner: MemoryDocumentStore):
        self._inner = inner
        self.calls: Counter[str] = Counter()

    @property
    def id(self) -> str:
        return self._inner.id

    def __getattr__(self, name: str) -> Any:
        target = getattr(self._inner, name)

        async def _recorded(*args, **kwargs):
            self.calls[name] += 1
            return await target(*args, **kwargs)

        return _recorded


class RecordingAccount(MemoryDocumentAccount):
    """MemoryDocumentAccount whose container handles record their calls."""

    def __init__(self, settings: Settings | None = None):
        super().__init__(settings)
        self.stores: dict[tuple[str, str], RecordingStore] = {}

    def get_container(self, db_name: str, container_name: str) -> RecordingStore:
        inner = super().get_container(db_name, container_name)
        key = (db_name, container_name)
        if key not in self.stores:
            self.stores[key] = RecordingStore(inner)
        return self.stores[key]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        endpoint="https://localhost:8081/",
        key="test-key",
        database_id="FamilyDatabase",
        container_id="FamilyContainer",
        backend_type="memory",
    )


@pytest.fixture
def account(settings: Settings) -> RecordingAccount:
    return RecordingAccount(settings)


@pytest.fixture
async def container(account: RecordingAccount, settings: Settings) -> RecordingStore:
    await account.ensure_database(settings.database_id)
    await account.ensure_container(settings.database_id, settings.container_id, PARTITION_KEY_PATH)
    return account.get_container(settings.database_id, settings.container_id)
