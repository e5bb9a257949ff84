# tests/fakes.py

from __future__ import annotations

from typing import Any

import redis


class FakeRedis:
    """
    Tiny in-process stand-in for redis.Redis (decode_responses=True).

    Only the commands RedisTaskStore issues are implemented.
    """

    def __init__(self) -> None:
        self.strings: dict[str, str] = {}
        self.lists: dict[str, list[str]] = {}
        self.available = True
        self.closed = False

    def _check(self) -> None:
        if not self.available:
            raise redis.ConnectionError("fake redis is down")

    def _wrongtype(self, key: str, kind: dict) -> None:
        if key in kind:
            raise redis.ResponseError(
                "WRONGTYPE Operation against a key holding the wrong kind of value"
            )

    def ping(self) -> bool:
        self._check()
        return True

    def close(self) -> None:
        self.closed = True

    def get(self, key: str) -> str | None:
        self._check()
        self._wrongtype(key, self.lists)
        return self.strings.get(key)

    def mget(self, keys: list[str]) -> list[str | None]:
        self._check()
        # MGET answers nil for keys holding other types
        return [self.strings.get(k) for k in keys]

    def set(self, key: str, value: str) -> bool:
        self._check()
        self.lists.pop(key, None)
        self.strings[key] = value
        return True

    def exists(self, key: str) -> int:
        self._check()
        return int(key in self.strings or key in self.lists)

    def delete(self, *keys: str) -> int:
        self._check()
        removed = 0
        for key in keys:
            if self.strings.pop(key, None) is not None:
                removed += 1
            elif self.lists.pop(key, None) is not None:
                removed += 1
        return removed

    def rpush(self, key: str, *values: str) -> int:
        self._check()
        self._wrongtype(key, self.strings)
        items = self.lists.setdefault(key, [])
        items.extend(values)
        return len(items)

    def lrem(self, key: str, count: int, value: str) -> int:
        self._check()
        self._wrongtype(key, self.strings)
        items = self.lists.get(key, [])
        kept = [item for item in items if item != value]
        removed = len(items) - len(kept)
        if kept:
            self.lists[key] = kept
        else:
            self.lists.pop(key, None)
        return removed

    def lrange(self, key: str, start: int, end: int) -> list[str]:
        self._check()
        self._wrongtype(key, self.strings)
        items = self.lists.get(key, [])
        stop = None if end == -1 else end + 1
        return list(items[start:stop])

    def pipeline(self, transaction: bool = True) -> "FakePipeline":
        return FakePipeline(self)


class FakePipeline:
    def __init__(self, client: FakeRedis) -> None:
        self.client = client
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def __getattr__(self, name: str):
        def queue(*args: Any):
            self.calls.append((name, args))
            return self

        return queue

    def execute(self) -> list[Any]:
        results = [getattr(self.client, name)(*args) for name, args in self.calls]
        self.calls = []
        return results
