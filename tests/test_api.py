"""
Integration tests for the transaction endpoints.
Tests HTTP status mapping and end-to-end flows using FastAPI TestClient.
"""

import json
import uuid

import pytest
from fastapi.testclient import TestClient

from bookkeeping_api.app.core import store as store_module
from bookkeeping_api.app.core.config import Settings
from bookkeeping_api.app.core.exceptions import PersistenceError
from bookkeeping_api.app.main import create_app

BASE = "/api/v1"


def _create(client, **overrides):
    body = {"user": "alice", "item": "Book", "amount": 9.5}
    body.update(overrides)
    return client.post(f"{BASE}/transactions", json=body)


class TestCreate:
    def test_create_returns_201_and_stored_record(self, client, storage_path):
        r = _create(client, user=" Alice ", item=" Book ", timestamp=1_700_000_000)
        assert r.status_code == 201
        data = r.json()
        assert data["user"] == "Alice"
        assert data["item"] == "Book"
        assert data["amount"] == 9.5
        assert data["timestamp"] == 1_700_000_000
        uuid.UUID(data["id"])

        on_disk = json.loads(storage_path.read_text(encoding="utf-8"))
        assert on_disk == [data]

    def test_create_empty_user_is_400(self, client):
        r = _create(client, user="   ")
        assert r.status_code == 400
        assert "user" in r.json()["detail"]

    def test_create_missing_field_is_422(self, client):
        r = client.post(f"{BASE}/transactions", json={"user": "a", "item": "b"})
        assert r.status_code == 422

    def test_create_persistence_failure_is_500(self, client, monkeypatch):
        def failing_persist(records, path):
            raise PersistenceError("disk unavailable")

        monkeypatch.setattr(store_module, "persist_transactions", failing_persist)
        r = _create(client)
        assert r.status_code == 500
        assert r.json()["detail"] == "failed to save transaction"

        # Committed in memory even though the write failed.
        assert len(client.get(f"{BASE}/transactions").json()) == 1


class TestReadAndUpdate:
    def test_list_in_insertion_order(self, client):
        ids = [_create(client, item=f"item {i}").json()["id"] for i in range(3)]
        r = client.get(f"{BASE}/transactions")
        assert r.status_code == 200
        assert [t["id"] for t in r.json()] == ids

    def test_get_by_id(self, client):
        created = _create(client).json()
        r = client.get(f"{BASE}/transactions/{created['id']}")
        assert r.status_code == 200
        assert r.json() == created

    def test_get_unknown_id_is_404(self, client):
        r = client.get(f"{BASE}/transactions/{uuid.uuid4()}")
        assert r.status_code == 404

    def test_get_malformed_id_is_400(self, client):
        r = client.get(f"{BASE}/transactions/not-a-uuid")
        assert r.status_code == 400
        assert r.json()["detail"] == "invalid uuid"

    def test_partial_update(self, client):
        created = _create(client, amount=10, timestamp=123).json()
        r = client.put(f"{BASE}/transactions/{created['id']}", json={"item": "NewItem"})
        assert r.status_code == 200
        updated = r.json()
        assert updated["item"] == "NewItem"
        assert updated["amount"] == 10
        assert updated["timestamp"] == 123
        assert client.get(f"{BASE}/transactions/{created['id']}").json() == updated

    def test_update_ignores_id_in_body(self, client):
        created = _create(client).json()
        r = client.put(
            f"{BASE}/transactions/{created['id']}",
            json={"id": str(uuid.uuid4()), "amount": 1},
        )
        assert r.status_code == 200
        assert r.json()["id"] == created["id"]

    def test_update_invalid_field_is_400(self, client):
        created = _create(client).json()
        r = client.put(f"{BASE}/transactions/{created['id']}", json={"item": " "})
        assert r.status_code == 400

    def test_update_unknown_id_is_404(self, client):
        r = client.put(f"{BASE}/transactions/{uuid.uuid4()}", json={"item": "x"})
        assert r.status_code == 404


class TestDelete:
    def test_delete_then_delete_again(self, client):
        created = _create(client).json()
        first = client.delete(f"{BASE}/transactions/{created['id']}")
        second = client.delete(f"{BASE}/transactions/{created['id']}")
        assert first.status_code == 204
        assert second.status_code == 404
        assert client.get(f"{BASE}/transactions").json() == []

    def test_delete_malformed_id_is_400(self, client):
        assert client.delete(f"{BASE}/transactions/123").status_code == 400


class TestSummaryAndHealth:
    def test_user_summary(self, client):
        _create(client, user="alice", amount=10)
        _create(client, user="bob", amount=3)
        _create(client, user="alice", amount=-4)

        r = client.get(f"{BASE}/users/alice/summary")
        assert r.status_code == 200
        data = r.json()
        assert data["user"] == "alice"
        assert data["count"] == 2
        assert data["total_amount"] == 6
        assert len(data["records"]) == 2

    def test_summary_for_unknown_user_is_empty(self, client):
        data = client.get(f"{BASE}/users/nobody/summary").json()
        assert data == {"user": "nobody", "count": 0, "total_amount": 0.0, "records": []}

    def test_health_reports_record_count(self, client):
        _create(client)
        assert client.get(f"{BASE}/health").json() == {"status": "ok", "records": 1}


def test_app_loads_existing_file_at_startup(storage_path):
    first_app = create_app(Settings(storage_path=str(storage_path)))
    with TestClient(first_app) as client:
        created = _create(client).json()

    second_app = create_app(Settings(storage_path=str(storage_path)))
    with TestClient(second_app) as client:
        assert client.get(f"{BASE}/transactions").json() == [created]


@pytest.mark.parametrize("content", ["not json", '{"a": 1}'])
def test_app_starts_empty_on_unparseable_file(storage_path, content):
    storage_path.write_text(content, encoding="utf-8")
    with TestClient(create_app(Settings(storage_path=str(storage_path)))) as client:
        assert client.get(f"{BASE}/transactions").json() == []


def test_store_is_loaded_when_the_app_starts(storage_path):
    app = create_app(Settings(storage_path=str(storage_path)))
    assert getattr(app.state, "store", None) is None

    # Written after create_app but before startup, so it must be picked up.
    record = {
        "id": str(uuid.uuid4()),
        "user": "alice",
        "item": "Book",
        "amount": 9.5,
        "timestamp": 1,
    }
    storage_path.write_text(json.dumps([record]), encoding="utf-8")

    with TestClient(app) as client:
        assert app.state.store.path == storage_path.resolve()
        assert client.get(f"{BASE}/transactions").json() == [record]
