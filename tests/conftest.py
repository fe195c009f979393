from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from prediction_market.db.sessions import make_engine
from prediction_market.main import app
from prediction_market.storage import MemoryStorage, SqlStorage, StorageABC


@pytest.fixture(params=["memory", "sql"])
def storage(request: pytest.FixtureRequest) -> Iterator[StorageABC]:
    """Each storage test runs against both backends, starting empty."""
    if request.param == "memory":
        yield MemoryStorage(seed=False)
        return
    engine = make_engine("sqlite://")
    yield SqlStorage(engine)
    engine.dispose()


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """API client over fresh in-memory storage seeded with the demo markets."""
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("SEED_DEMO_MARKETS", "1")
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sql_client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """API client over an in-memory SQLite database."""
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    with TestClient(app) as test_client:
        yield test_client
