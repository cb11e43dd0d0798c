import asyncio

import pytest
from fastapi.testclient import TestClient

from glamora_api.app.core.config import Settings
from glamora_api.app.core.errors import StoreError
from glamora_api.app.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=str(tmp_path / "glamora-test.db"),
        bcrypt_rounds=4,
        cors_origins=["https://glamora-store.netlify.app", "http://localhost:5500"],
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def stored(client):
    """Run a store coroutine against the client's open store."""

    def _run(coro_factory):
        return asyncio.run(coro_factory(client.app.state.store))

    return _run


class BrokenStore:
    """Store whose every operation fails."""

    async def insert(self, collection, document):
        raise StoreError("insert failed")

    async def find_one(self, collection, filter):
        raise StoreError("find_one failed")

    async def find_many(self, collection, filter=None, sort=None):
        raise StoreError("find_many failed")


@pytest.fixture
def broken_client(client):
    from glamora_api.app.api.deps import get_store

    client.app.dependency_overrides[get_store] = BrokenStore
    yield client
    client.app.dependency_overrides.clear()
