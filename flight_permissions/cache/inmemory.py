"""In-memory resolver cache."""

from __future__ import annotations

import time
from typing import Any, Dict, Tuple

from .base import ResolverCache


class InMemoryResolverCache(ResolverCache):
    """Keep cached rule tables in local memory.

    Useful for tests or long-lived processes that build many evaluators.
    Data is not persisted across process restarts.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[Any, float]] = {}

    def _live_entry(self, key: str) -> Tuple[Any, float] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry[1] <= time.monotonic():
            del self._entries[key]
            return None
        return entry

    def is_cached(self, key: str) -> bool:
        return self._live_entry(key) is not None

    def retrieve(self, key: str) -> Any:
        entry = self._live_entry(key)
        return entry[0] if entry else None

    def store(self, key: str, value: Any, ttl: int) -> None:
        if ttl <= 0:
            return
        self._entries[key] = (value, time.monotonic() + ttl)

    def clear(self) -> None:
        self._entries.clear()
