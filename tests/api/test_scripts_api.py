import pytest

from tablegen.api.deps import get_list_store
from tablegen.core.errors import StorageError
from tablegen.infrastructure.stores import InMemoryListStore
from tablegen.main import app


CLIENTE_SCRIPT = "CREATE TABLE CLIENTE (\n    ID NUMBER(10) NOT NULL,\n    NOMBRE VARCHAR2(255)\n);\n"


class UnavailableStore(InMemoryListStore):
    async def get(self):
        raise StorageError("Failed to read saved scripts: connection refused")


def _save(client, table_name="CLIENTE", script=CLIENTE_SCRIPT, **extra):
    return client.post("/scripts/", json=dict(script=script, table_name=table_name, **extra))


class TestSave:
    def test_new_table_is_created(self, client):
        response = _save(client, table_comment="Clients")

        assert response.status_code == 201
        body = response.json()
        assert body["created"] is True
        assert body["script"]["table_name"] == "CLIENTE"
        assert body["script"]["table_comment"] == "Clients"
        assert body["script"]["is_alter_table"] is False
        assert body["script"]["id"]

    def test_same_table_is_replaced(self, client):
        first = _save(client).json()["script"]

        response = _save(client, script="-- v2\n")

        assert response.status_code == 200
        assert response.json()["created"] is False
        assert response.json()["script"]["id"] == first["id"]
        assert client.get("/scripts/").json()["total"] == 1

    @pytest.mark.parametrize("payload", [
        {"script": "", "table_name": "CLIENTE"},
        {"script": "CREATE TABLE X (\n    A NUMBER\n);", "table_name": "  "},
        {},
    ])
    def test_missing_fields_are_a_bad_request(self, client, payload):
        response = client.post("/scripts/", json=payload)

        assert response.status_code == 400

    def test_record_shape_in_store(self, client, memory_store):
        _save(client, is_alter_table=True)

        record = memory_store.raw
        assert '"tableName": "CLIENTE"' in record
        assert '"isAlterTable": true' in record
        assert "tableComment" not in record


class TestSaveTable:
    TABLE = {
        "name": "PEDIDO",
        "comment": "Customer orders",
        "columns": [
            {"name": "ID", "data_type": "NUMBER(10)", "is_primary_key": True},
            {"name": "CLIENTE_ID", "data_type": "NUMBER(10)", "has_foreign_key": True, "foreign_table": "CLIENTE"},
        ],
    }

    def test_table_is_rendered_and_saved(self, client):
        response = client.post("/scripts/tables", json={"table": self.TABLE, "include_drop_guard": False})

        assert response.status_code == 201
        saved = response.json()["script"]
        assert saved["table_name"] == "PEDIDO"
        assert saved["table_comment"] == "Customer orders"
        assert "CREATE TABLE PEDIDO (" in saved["script"]
        assert "DROP TABLE" not in saved["script"]

    def test_saved_table_round_trips_through_editor(self, client):
        saved = client.post("/scripts/tables", json={"table": self.TABLE}).json()["script"]

        response = client.get(f"/scripts/{saved['id']}/editor")

        assert response.status_code == 200
        table = response.json()
        assert table["name"] == "PEDIDO"
        assert table["comment"] == "Customer orders"
        assert [column["name"] for column in table["columns"]] == ["ID", "CLIENTE_ID"]
        assert table["columns"][0]["is_primary_key"] is True
        assert table["columns"][1]["foreign_table"] == "CLIENTE"

    def test_invalid_table_is_a_bad_request(self, client):
        response = client.post("/scripts/tables", json={"table": dict(self.TABLE, name="")})

        assert response.status_code == 400


class TestRead:
    def test_list_filter_and_order(self, client):
        _save(client, table_name="CLIENTE")
        _save(client, table_name="PEDIDO")
        _save(client, table_name="PEDIDO_DETALLE")

        filtered = client.get("/scripts/", params={"q": "pedido", "sort": "table_name", "order": "asc"})

        assert filtered.status_code == 200
        assert filtered.json()["total"] == 2
        assert [script["table_name"] for script in filtered.json()["scripts"]] == ["PEDIDO", "PEDIDO_DETALLE"]

    def test_unsupported_sort_is_rejected(self, client):
        assert client.get("/scripts/", params={"sort": "size"}).status_code == 422

    def test_get_by_id(self, client):
        saved = _save(client).json()["script"]

        response = client.get(f"/scripts/{saved['id']}")

        assert response.status_code == 200
        assert response.json()["script"] == CLIENTE_SCRIPT

    def test_unknown_id(self, client):
        assert client.get("/scripts/nope").status_code == 404
        assert client.get("/scripts/nope/editor").status_code == 404


class TestUpdateAndDelete:
    def test_update_keeps_id(self, client):
        saved = _save(client).json()["script"]

        response = client.put(
            f"/scripts/{saved['id']}",
            json={"script": "-- v2\n", "table_name": "CLIENTE", "table_comment": "Clients"}
        )

        assert response.status_code == 200
        assert response.json()["id"] == saved["id"]
        assert client.get(f"/scripts/{saved['id']}").json()["script"] == "-- v2\n"

    def test_update_requires_script(self, client):
        saved = _save(client).json()["script"]

        response = client.put(f"/scripts/{saved['id']}", json={"script": "", "table_name": "CLIENTE"})

        assert response.status_code == 400

    def test_delete(self, client):
        saved = _save(client).json()["script"]

        assert client.delete(f"/scripts/{saved['id']}").status_code == 204
        assert client.delete(f"/scripts/{saved['id']}").status_code == 404
        assert client.get("/scripts/").json()["total"] == 0


class TestStorageFailure:
    @pytest.fixture
    def failing_client(self, client):
        app.dependency_overrides[get_list_store] = lambda: UnavailableStore()
        return client

    def test_list_reports_storage_failure(self, failing_client):
        response = failing_client.get("/scripts/")

        assert response.status_code == 500
        assert "connection refused" in response.json()["detail"]

    def test_save_reports_storage_failure(self, failing_client):
        assert _save(failing_client).status_code == 500

    def test_delete_reports_storage_failure(self, failing_client):
        assert failing_client.delete("/scripts/1").status_code == 500


class TestCollectionPath:
    def test_save_and_list_without_trailing_slash(self, client):
        response = client.post("/scripts", json={"script": CLIENTE_SCRIPT, "table_name": "CLIENTE"},
                               follow_redirects=False)

        assert response.status_code == 201
        listed = client.get("/scripts", follow_redirects=False)
        assert listed.status_code == 200
        assert listed.json()["total"] == 1


def test_editor_returns_long_identifiers(client):
    name = "C" * 200
    script = f"CREATE TABLE T (\n    {name} NUMBER\n);\n"
    saved = _save(client, table_name="T", script=script).json()["script"]

    response = client.get(f"/scripts/{saved['id']}/editor")

    assert response.status_code == 200
    assert response.json()["columns"][0]["name"] == name
