"""Resolver cache factory and backends."""

from __future__ import annotations

import os
from typing import Optional

from ..config import PermissionsConfig, load_config
from .base import ResolverCache
from .inmemory import InMemoryResolverCache
from .sqlite import SQLiteResolverCache


def get_cache(
    backend: Optional[str] = None, config: Optional[PermissionsConfig] = None
) -> Optional[ResolverCache]:
    """Factory function to get the configured resolver cache.

    Returns ``None`` for the ``none`` backend, which disables rule caching.
    """

    config = config or load_config()
    backend = (
        backend
        or os.getenv("FLIGHT_PERMISSIONS_CACHE")
        or config.cache.backend
    ).lower()

    if backend == "none":
        return None
    elif backend == "memory":
        return InMemoryResolverCache()
    elif backend == "sqlite":
        return SQLiteResolverCache(config.cache.path)
    elif backend == "redis":
        from .redis import RedisResolverCache

        redis_conf = config.cache.redis
        return RedisResolverCache(
            host=redis_conf.host,
            port=redis_conf.port,
            db=redis_conf.db,
            password=redis_conf.password,
            prefix=redis_conf.prefix,
        )
    else:
        raise ValueError(f"Unsupported cache backend: {backend}")


__all__ = ["ResolverCache", "InMemoryResolverCache", "SQLiteResolverCache", "get_cache"]
