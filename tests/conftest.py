# tests/conftest.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tasklist.core.config import Settings
from tasklist.main import create_app
from tasklist.store import InMemoryTaskStore, RedisTaskStore

from .fakes import FakeRedis


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings built from a clean environment, independent of any local .env."""
    for name in ("API_PREFIX", "TASK_STORE_BACKEND", "DEBUG", "ALLOWED_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    return Settings()


@pytest.fixture()
def store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture()
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture()
def redis_store(fake_redis: FakeRedis) -> RedisTaskStore:
    return RedisTaskStore(fake_redis)


@pytest.fixture()
def app(settings: Settings, store: InMemoryTaskStore):
    return create_app(settings=settings, store=store)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)
