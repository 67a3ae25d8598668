"""Tests for the quickstart steps against the in-memory store."""

import pytest
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError

from family_quickstart import quickstart
from family_quickstart.models import Family
from family_quickstart.sample_data import adamski_family, orlando_family


class TestCreateDatabaseAndContainer:
    """Database and container creation is idempotent."""

    async def test_create_database_prints_id(self, account, settings, capsys):
        database_id = await quickstart.create_database(account, settings)

        assert database_id == "FamilyDatabase"
        assert account.database_exists("FamilyDatabase")
        assert "Created Database: FamilyDatabase" in capsys.readouterr().out

    async def test_create_database_twice(self, account, settings):
        await quickstart.create_database(account, settings)
        assert await quickstart.create_database(account, settings) == "FamilyDatabase"

    async def test_create_container_twice_returns_same_data(self, account, settings, capsys):
        await quickstart.create_database(account, settings)
        first = await quickstart.create_container(account, settings)
        await first.upsert(adamski_family().to_document())

        second = await quickstart.create_container(account, settings)

        assert second.id == "FamilyContainer"
        assert len(await second.list()) == 1
        assert "Created Container: FamilyContainer" in capsys.readouterr().out


class TestAddItems:
    """Check-then-create for Adamski, unconditional upsert for Orlando."""

    async def test_absent_record_is_created_once(self, account, settings, container, capsys):
        adamski, orlando = await quickstart.add_items_to_container(account, settings)

        assert container.calls["create"] == 1
        assert container.calls["upsert"] == 1
        assert adamski.id == "Adamski.1"
        assert orlando.id == "Orlando.1983"
        out = capsys.readouterr().out
        assert "Created item in database with id: Adamski.1" in out
        assert "Created item in database with id: Orlando.1983" in out

    async def test_present_record_is_not_created(self, account, settings, container, capsys):
        existing = adamski_family()
        existing.is_registered = True  # differs from the sample
        await container._inner.create(existing.to_document())

        adamski, _ = await quickstart.add_items_to_container(account, settings)

        assert container.calls["create"] == 0
        assert adamski.to_document() == existing.to_document()
        assert "Item in database with id: Adamski.1 already exists" in capsys.readouterr().out

    async def test_other_read_failures_propagate(self, account, settings, container, monkeypatch):
        async def _throttled(item_id, partition_key):
            raise CosmosHttpResponseError(status_code=429, message="Request rate is large")

        monkeypatch.setattr(container._inner, "get", _throttled)

        with pytest.raises(CosmosHttpResponseError) as exc_info:
            await quickstart.add_items_to_container(account, settings)

        assert exc_info.value.status_code == 429
        assert container.calls["create"] == 0

    async def test_upsert_replaces_existing_fields(self, account, settings, container):
        stale = orlando_family()
        stale.address.city = "Chicago"
        stale.children = stale.children[:1]
        await container._inner.create(stale.to_document())

        _, orlando = await quickstart.add_items_to_container(account, settings)

        stored = Family.from_document(await container._inner.get("Orlando.1983", "Orlando"))
        assert stored.to_document() == orlando.to_document() == orlando_family().to_document()
        assert stored.address.city == "Villa Park"
        assert len(stored.children) == 2


class TestQueryItems:

    async def test_query_returns_only_adamski(self, account, settings, container, capsys):
        await quickstart.add_items_to_container(account, settings)
        capsys.readouterr()

        families = await quickstart.query_items(account, settings)

        assert [f.id for f in families] == ["Adamski.1"]
        assert all(f.last_name == "Adamski" for f in families)
        out = capsys.readouterr().out
        assert "Running query: SELECT * FROM c WHERE c.LastName = 'Adamski'" in out
        assert '\tRead {"id":"Adamski.1","LastName":"Adamski"' in out

    async def test_query_on_empty_container(self, account, settings, container):
        assert await quickstart.query_items(account, settings) == []


class TestReplaceAndDelete:

    async def test_replace_applies_exactly_two_mutations(self, account, settings, container, capsys):
        await quickstart.add_items_to_container(account, settings)
        before = Family.from_document(await container._inner.get("Orlando.1983", "Orlando"))
        before.is_registered = False
        await container._inner.upsert(before.to_document())

        replaced = await quickstart.replace_family_item(account, settings)

        assert replaced.id == before.id
        assert replaced.last_name == before.last_name
        assert replaced.is_registered is True
        assert replaced.children[0].grade == 6

        expected = before.model_copy(deep=True)
        expected.is_registered = True
        expected.children[0].grade = 6
        assert replaced.to_document() == expected.to_document()
        assert "Updated Family [Orlando,Orlando.1983]." in capsys.readouterr().out

    async def test_replace_missing_record_propagates(self, account, settings, container):
        with pytest.raises(CosmosResourceNotFoundError):
            await quickstart.replace_family_item(account, settings)

    async def test_delete_then_read_is_not_found(self, account, settings, container, capsys):
        await quickstart.add_items_to_container(account, settings)

        await quickstart.delete_family_item(account, settings)

        with pytest.raises(CosmosResourceNotFoundError):
            await container._inner.get("Orlando.1983", "Orlando")
        assert "Deleted Family [Orlando,Orlando.1983]" in capsys.readouterr().out


class TestRun:
    """The whole walkthrough end to end."""

    async def test_end_to_end(self, account, settings, capsys):
        await quickstart.run(account, settings)

        assert not account.database_exists("FamilyDatabase")
        lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
        assert lines[0] == "Created Database: FamilyDatabase"
        assert lines[1] == "Created Container: FamilyContainer"
        assert lines[2] == "Created item in database with id: Adamski.1"
        assert lines[3] == "Created item in database with id: Orlando.1983"
        assert lines[4].startswith("Running query:")
        assert lines[5].startswith("\tRead ")
        assert lines[6] == "Updated Family [Orlando,Orlando.1983]."
        assert '"IsRegistered":true' in lines[7]
        assert '"Grade":6' in lines[7]
        assert lines[8] == "Deleted Family [Orlando,Orlando.1983]"
        assert lines[9] == "Deleted Database: FamilyDatabase"

    async def test_failure_stops_the_run(self, account, settings, monkeypatch):
        async def _boom(db_name, container_name, partition_key_path):
            raise CosmosHttpResponseError(status_code=403, message="Forbidden")

        monkeypatch.setattr(account, "ensure_container", _boom)

        with pytest.raises(CosmosHttpResponseError):
            await quickstart.run(account, settings)

        # database was created and is left behind
        assert account.database_exists("FamilyDatabase")
