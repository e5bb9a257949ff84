"""
Redis-backed task store.

Each task is stored as a JSON string under ``task:<id>``; the key
``task_index`` is a list of ids in creation order, kept outside the
``task:`` namespace so no task id can name it. Task key and index entry
are always written together in one MULTI/EXEC pipeline.
"""
import json
import logging
import threading
from typing import Any, List, Mapping, Optional

import redis

from ..core.errors import TaskNotFoundError
from ..models.task import Task
from .base import TaskStore, apply_changes, matches, validate_changes, validate_title

logger = logging.getLogger(__name__)


class RedisTaskStore(TaskStore):
    """Task store keeping JSON documents in Redis"""

    backend_name = "redis"

    def __init__(self, client, key_prefix: str = "task"):
        self.redis_client = client
        self.key_prefix = key_prefix
        self.index_key = f"{key_prefix}_index"
        # serialises read-modify-write within this process
        self._lock = threading.Lock()

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "task") -> "RedisTaskStore":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )
        logger.info("Redis task store configured")
        return cls(client, key_prefix=key_prefix)

    def _key(self, task_id: str) -> str:
        return f"{self.key_prefix}:{task_id}"

    def _load(self, task_id: str) -> Task:
        raw = self.redis_client.get(self._key(task_id))
        if raw is None:
            raise TaskNotFoundError(task_id)
        return Task.from_dict(json.loads(raw))

    def list(self, completed: Optional[bool] = None, search: Optional[str] = None) -> List[Task]:
        with self._lock:
            ids = self.redis_client.lrange(self.index_key, 0, -1)
            if not ids:
                return []
            documents = self.redis_client.mget([self._key(task_id) for task_id in ids])

        tasks = []
        for task_id, raw in zip(ids, documents):
            if raw is None:
                logger.warning(f"Index entry {task_id} has no task document")
                continue
            task = Task.from_dict(json.loads(raw))
            if matches(task, completed=completed, search=search):
                tasks.append(task)
        return tasks

    def create(self, title: str, description: Optional[str] = None) -> Task:
        validate_title(title)
        task = Task(title=title, description=description)
        with self._lock:
            while self.redis_client.exists(self._key(task.id)):
                task = Task(title=title, description=description)
            pipe = self.redis_client.pipeline(transaction=True)
            pipe.set(self._key(task.id), json.dumps(task.to_dict()))
            pipe.rpush(self.index_key, task.id)
            pipe.execute()
        logger.info(f"Created task {task.id}")
        return task

    def get(self, task_id: str) -> Task:
        with self._lock:
            return self._load(task_id)

    def update(self, task_id: str, changes: Mapping[str, Any]) -> Task:
        checked = validate_changes(changes)
        with self._lock:
            updated = apply_changes(self._load(task_id), checked)
            self.redis_client.set(self._key(task_id), json.dumps(updated.to_dict()))
        logger.info(f"Updated task {task_id} fields={sorted(checked)}")
        return updated

    def delete(self, task_id: str) -> None:
        with self._lock:
            pipe = self.redis_client.pipeline(transaction=True)
            pipe.delete(self._key(task_id))
            pipe.lrem(self.index_key, 0, task_id)
            deleted, _ = pipe.execute()
        if not deleted:
            logger.debug(f"Task {task_id} not found for delete")
            raise TaskNotFoundError(task_id)
        logger.info(f"Deleted task {task_id}")

    def clear(self) -> None:
        with self._lock:
            ids = self.redis_client.lrange(self.index_key, 0, -1)
            keys = [self._key(task_id) for task_id in ids] + [self.index_key]
            self.redis_client.delete(*keys)

    def ping(self) -> bool:
        try:
            return bool(self.redis_client.ping())
        except redis.RedisError as e:
            logger.error(f"Redis ping failed: {e}")
            return False

    def close(self) -> None:
        try:
            self.redis_client.close()
            logger.info("Redis connection closed")
        except redis.RedisError as e:
            logger.error(f"Error closing Redis connection: {e}")
