import json

import pytest

from tablegen.core.errors import StorageError
from tablegen.db.repositories.script_repository import (
    SavedScriptRepository, UPSERT_BY_ID, UPSERT_BY_TABLE_NAME
)
from tablegen.domains.scripts.entities import SavedScript
from tablegen.infrastructure.stores import InMemoryListStore


STORED = [
    {
        "id": "1700000000000",
        "script": "CREATE TABLE CLIENTE (\n    ID NUMBER\n);\n",
        "tableName": "CLIENTE",
        "createdAt": "2024-01-01T10:00:00.000Z",
        "isAlterTable": False,
        "tableComment": "Clients",
    },
    {
        "id": "1700000000001",
        "script": "ALTER TABLE PEDIDO ADD TOTAL NUMBER;\n",
        "tableName": "PEDIDO",
        "createdAt": "2024-01-02T10:00:00.000Z",
        "isAlterTable": True,
    },
    {
        "id": "1700000000002",
        "script": "CREATE TABLE PRODUCTO (\n    ID NUMBER\n);\n",
        "tableName": "PRODUCTO",
        "createdAt": "2024-01-03T10:00:00.000Z",
        "isAlterTable": False,
    },
]


class RejectingStore(InMemoryListStore):
    async def set(self, records):
        return "ERR"


class BrokenStore(InMemoryListStore):
    async def get(self):
        raise StorageError("connection refused")


def _script(table_name="CLIENTE", script="CREATE TABLE CLIENTE (\n    ID NUMBER(10)\n);\n"):
    return SavedScript.create(table_name=table_name, script=script)


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_leaves_other_records_byte_identical(self):
        store = InMemoryListStore(STORED)
        repository = SavedScriptRepository(store)

        deleted = await repository.delete_by_id("1700000000001")

        assert deleted
        assert store.raw == json.dumps([STORED[0], STORED[2]])

    @pytest.mark.asyncio
    async def test_delete_unknown_id_does_not_write(self):
        store = InMemoryListStore(STORED)
        before = store.raw

        assert not await SavedScriptRepository(store).delete_by_id("missing")
        assert store.raw == before


class TestSaveByTableName:
    @pytest.mark.asyncio
    async def test_new_table_is_appended_with_generated_id(self):
        store = InMemoryListStore(STORED)
        repository = SavedScriptRepository(store, upsert_key=UPSERT_BY_TABLE_NAME)

        stored, created = await repository.save(_script(table_name="FACTURA"))

        assert created
        assert stored.id and stored.id.isdigit()
        records = await store.get()
        assert [record["tableName"] for record in records] == ["CLIENTE", "PEDIDO", "PRODUCTO", "FACTURA"]
        assert records[:3] == STORED

    @pytest.mark.asyncio
    async def test_same_table_replaces_in_place_and_keeps_id(self):
        store = InMemoryListStore(STORED)
        repository = SavedScriptRepository(store, upsert_key=UPSERT_BY_TABLE_NAME)

        stored, created = await repository.save(_script(table_name="CLIENTE", script="-- new\n"))

        assert not created
        assert stored.id == "1700000000000"
        records = await store.get()
        assert len(records) == 3
        assert records[0]["script"] == "-- new\n"
        assert records[1:] == STORED[1:]

    @pytest.mark.asyncio
    async def test_generated_ids_are_unique(self):
        repository = SavedScriptRepository(InMemoryListStore())

        first, _ = await repository.save(_script(table_name="A"))
        second, _ = await repository.save(_script(table_name="B"))

        assert first.id != second.id


class TestSaveById:
    @pytest.mark.asyncio
    async def test_same_table_is_appended(self):
        store = InMemoryListStore(STORED)
        repository = SavedScriptRepository(store, upsert_key=UPSERT_BY_ID)

        stored, created = await repository.save(_script(table_name="CLIENTE"))

        assert created
        assert stored.id not in {record["id"] for record in STORED}
        assert [record["tableName"] for record in await store.get()] == ["CLIENTE", "PEDIDO", "PRODUCTO", "CLIENTE"]

    @pytest.mark.asyncio
    async def test_known_id_is_replaced(self):
        store = InMemoryListStore(STORED)
        repository = SavedScriptRepository(store, upsert_key=UPSERT_BY_ID)

        stored, created = await repository.save(_script(table_name="PEDIDO").with_id("1700000000001"))

        assert not created
        assert len(await store.get()) == 3


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_by_table_name_drops_duplicates_of_the_table(self):
        records = STORED + [dict(STORED[0], id="1700000000003")]
        store = InMemoryListStore(records)
        repository = SavedScriptRepository(store, upsert_key=UPSERT_BY_TABLE_NAME)

        stored = await repository.update("1700000000003", _script(table_name="CLIENTE", script="-- v2\n"))

        assert stored.id == "1700000000003"
        saved = await store.get()
        assert [record["id"] for record in saved] == ["1700000000001", "1700000000002", "1700000000003"]
        assert saved[-1]["script"] == "-- v2\n"

    @pytest.mark.asyncio
    async def test_update_by_id_keeps_other_records_of_the_table(self):
        records = STORED + [dict(STORED[0], id="1700000000003")]
        store = InMemoryListStore(records)
        repository = SavedScriptRepository(store, upsert_key=UPSERT_BY_ID)

        await repository.update("1700000000003", _script(table_name="CLIENTE", script="-- v2\n"))

        assert len(await store.get()) == 4

    @pytest.mark.asyncio
    async def test_update_of_unknown_id_appends(self):
        store = InMemoryListStore(STORED)

        stored = await SavedScriptRepository(store).update("42", _script(table_name="FACTURA"))

        assert stored.id == "42"
        assert (await store.get())[-1]["id"] == "42"


class TestReads:
    @pytest.mark.asyncio
    async def test_list_and_lookups(self):
        repository = SavedScriptRepository(InMemoryListStore(STORED))

        scripts = await repository.list()
        assert [script.table_name for script in scripts] == ["CLIENTE", "PEDIDO", "PRODUCTO"]
        assert scripts[0].table_comment == "Clients"
        assert scripts[1].is_alter_table

        assert (await repository.get_by_id("1700000000002")).table_name == "PRODUCTO"
        assert (await repository.find_by_table_name("PEDIDO")).id == "1700000000001"
        assert await repository.get_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_empty_store_lists_nothing(self):
        assert await SavedScriptRepository(InMemoryListStore()).list() == []


class TestFailures:
    @pytest.mark.asyncio
    async def test_rejected_write_is_a_storage_error(self):
        repository = SavedScriptRepository(RejectingStore(STORED))

        with pytest.raises(StorageError):
            await repository.save(_script(table_name="FACTURA"))

    @pytest.mark.asyncio
    async def test_read_failure_propagates(self):
        repository = SavedScriptRepository(BrokenStore())

        with pytest.raises(StorageError, match="connection refused"):
            await repository.delete_by_id("1700000000000")

    def test_unknown_upsert_key_is_rejected(self):
        with pytest.raises(ValueError):
            SavedScriptRepository(InMemoryListStore(), upsert_key="name")
