# tests/test_redis_store.py

from __future__ import annotations

import json

import pytest
import redis

from tasklist.core.config import Settings
from tasklist.core.errors import TaskNotFoundError
from tasklist.store import InMemoryTaskStore, RedisTaskStore, build_task_store

from .fakes import FakeRedis


def test_tasks_are_stored_as_json_documents(redis_store: RedisTaskStore, fake_redis: FakeRedis) -> None:
    task = redis_store.create("Buy milk", "semi-skimmed")

    document = json.loads(fake_redis.strings[f"task:{task.id}"])
    assert document["id"] == task.id
    assert document["title"] == "Buy milk"
    assert document["description"] == "semi-skimmed"
    assert document["completed"] is False
    assert fake_redis.lists["task_index"] == [task.id]


def test_delete_removes_document_and_index_entry(redis_store: RedisTaskStore, fake_redis: FakeRedis) -> None:
    keep = redis_store.create("keep")
    drop = redis_store.create("drop")

    redis_store.delete(drop.id)

    assert f"task:{drop.id}" not in fake_redis.strings
    assert fake_redis.lists["task_index"] == [keep.id]


def test_list_skips_dangling_index_entries(redis_store: RedisTaskStore, fake_redis: FakeRedis) -> None:
    task = redis_store.create("A")
    fake_redis.rpush("task_index", "ghost")

    assert [t.id for t in redis_store.list()] == [task.id]


def test_custom_key_prefix(fake_redis: FakeRedis) -> None:
    store = RedisTaskStore(fake_redis, key_prefix="todo")
    task = store.create("A")

    assert f"todo:{task.id}" in fake_redis.strings
    assert fake_redis.lists["todo_index"] == [task.id]


def test_ping_reports_unreachable_server(redis_store: RedisTaskStore, fake_redis: FakeRedis) -> None:
    assert redis_store.ping() is True
    fake_redis.available = False
    assert redis_store.ping() is False


def test_close_closes_client(redis_store: RedisTaskStore, fake_redis: FakeRedis) -> None:
    redis_store.close()
    assert fake_redis.closed is True


def test_build_task_store_selects_backend(monkeypatch) -> None:
    monkeypatch.setenv("TASK_STORE_BACKEND", "memory")
    assert isinstance(build_task_store(Settings()), InMemoryTaskStore)

    monkeypatch.setenv("TASK_STORE_BACKEND", "redis")
    monkeypatch.setenv("REDIS_URL", "redis://redis.example:6380/2")
    store = build_task_store(Settings())
    assert isinstance(store, RedisTaskStore)
    kwargs = store.redis_client.connection_pool.connection_kwargs
    assert kwargs["host"] == "redis.example"
    assert kwargs["port"] == 6380
    assert kwargs["db"] == 2


def test_index_key_is_outside_task_namespace(redis_store: RedisTaskStore, fake_redis: FakeRedis) -> None:
    task = redis_store.create("A")

    with pytest.raises(TaskNotFoundError):
        redis_store.delete("index")
    with pytest.raises(TaskNotFoundError):
        redis_store.get("index")

    assert redis_store.index_key == "task_index"
    assert not redis_store.index_key.startswith("task:")
    assert fake_redis.lists["task_index"] == [task.id]


def test_fake_reports_wrongtype_like_redis(fake_redis: FakeRedis) -> None:
    fake_redis.rpush("some_list", "x")
    with pytest.raises(redis.ResponseError, match="WRONGTYPE"):
        fake_redis.get("some_list")
