"""Shared fixtures for the bookkeeping API tests.

Every test gets its own transactions file under ``tmp_path`` so that
nothing touches the working directory and tests never share state.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from bookkeeping_api.app.core.config import Settings
from bookkeeping_api.app.core.store import DurableStore
from bookkeeping_api.app.main import create_app
from bookkeeping_api.app.services.record_service import RecordService


@pytest.fixture
def storage_path(tmp_path: Path) -> Path:
    return tmp_path / "transactions.json"


@pytest.fixture
def store(storage_path: Path) -> DurableStore:
    return DurableStore.open(storage_path)


@pytest.fixture
def service(store: DurableStore) -> RecordService:
    return RecordService(store)


@pytest.fixture
def app(storage_path: Path):
    return create_app(Settings(storage_path=str(storage_path)))


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
