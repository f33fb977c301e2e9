from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from app.cache import capabilities_cache
from app.config import get_settings
from app.db import models  # noqa: F401
from app.db.base import Base
from app.db.session import dispose_engine, get_engine


def _setup_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # A file database: TestClient runs routes on worker threads with their own connections.
    monkeypatch.setenv("REALTY_COACH_DATABASE_URL", f"sqlite:///{tmp_path / 'profiles.sqlite'}")
    get_settings.cache_clear()
    dispose_engine()
    capabilities_cache.clear()
    engine = get_engine()
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)


@pytest.fixture
def database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    _setup_db(tmp_path, monkeypatch)
    yield
    dispose_engine()
    get_settings.cache_clear()
    capabilities_cache.clear()


@pytest.fixture
def client(database: None) -> Iterator[TestClient]:
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client: TestClient) -> Callable[..., dict]:
    def _register(email: str, *capabilities: str, **fields: object) -> dict:
        payload = {"email": email, "capabilities": list(capabilities), **fields}
        response = client.post("/api/profile", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _register
