"""Base interface for resolver rule caches."""

from __future__ import annotations

import abc
from typing import Any


class ResolverCache(metaclass=abc.ABCMeta):
    """Key-value store with per-entry expiry used for reflected rule tables.

    Backends own expiry bookkeeping; the evaluator only asks whether a key
    is present and unexpired, reads it, and writes it with a TTL in seconds.
    Stored values are JSON-compatible.
    """

    @abc.abstractmethod
    def is_cached(self, key: str) -> bool:
        """Return ``True`` if ``key`` holds an unexpired value."""
        raise NotImplementedError

    @abc.abstractmethod
    def retrieve(self, key: str) -> Any:
        """Return the value stored under ``key`` or ``None`` if absent."""
        raise NotImplementedError

    @abc.abstractmethod
    def store(self, key: str, value: Any, ttl: int) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds."""
        raise NotImplementedError

    def close(self) -> None:
        """Release backend resources (no-op by default)."""
        pass
