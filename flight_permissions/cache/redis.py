"""Redis resolver cache for rule tables shared across hosts."""

from __future__ import annotations

import json
from typing import Any, Optional

try:
    import redis
except ImportError:
    redis = None

from .base import ResolverCache


class RedisResolverCache(ResolverCache):
    """Redis-based cache; expiry is delegated to Redis key TTLs."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: Optional[str] = None,
        prefix: str = "flight_permissions:",
        client: Optional[Any] = None,
    ) -> None:
        if redis is None and client is None:
            raise ImportError("redis package is required for RedisResolverCache")

        self.host = host
        self.port = port
        self.db = db
        self.password = password
        self.prefix = prefix
        self._redis: Optional[Any] = client

    def _client(self) -> Any:
        if self._redis is None:
            self._redis = redis.Redis(
                host=self.host,
                port=self.port,
                db=self.db,
                password=self.password,
                decode_responses=True,
            )
        return self._redis

    def is_cached(self, key: str) -> bool:
        return bool(self._client().exists(self.prefix + key))

    def retrieve(self, key: str) -> Any:
        raw = self._client().get(self.prefix + key)
        if raw is None:
            return None
        return json.loads(raw)

    def store(self, key: str, value: Any, ttl: int) -> None:
        if ttl <= 0:
            return
        self._client().set(self.prefix + key, json.dumps(value), ex=ttl)

    def close(self) -> None:
        if self._redis is not None:
            self._redis.close()
            self._redis = None
