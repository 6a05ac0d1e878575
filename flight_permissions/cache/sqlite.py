"""SQLite file-backed resolver cache."""

from __future__ import annotations

import json
import sqlite3
import time
from pathlib import Path
from typing import Any

from .base import ResolverCache


class SQLiteResolverCache(ResolverCache):
    """Persist cached rule tables in a SQLite file.

    Entries survive process restarts, so reflected rule tables can be
    shared between short-lived worker processes on one host.
    """

    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._ensure_schema()

    # ------------------------------------------------------------------
    # Schema management
    def _ensure_schema(self) -> None:
        cur = self._conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS resolver_cache (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                expires_at REAL NOT NULL
            )
            """
        )
        self._conn.commit()

    # ------------------------------------------------------------------
    # Helper methods
    def _execute(self, query: str, *params: Any) -> None:
        cur = self._conn.cursor()
        cur.execute(query, params)
        self._conn.commit()

    def _fetch_live(self, key: str) -> sqlite3.Row | None:
        cur = self._conn.cursor()
        cur.execute(
            "SELECT value FROM resolver_cache WHERE key = ? AND expires_at > ?",
            (key, time.time()),
        )
        return cur.fetchone()

    # ------------------------------------------------------------------
    # Cache API
    def is_cached(self, key: str) -> bool:
        return self._fetch_live(key) is not None

    def retrieve(self, key: str) -> Any:
        row = self._fetch_live(key)
        if not row:
            return None
        return json.loads(row["value"])

    def store(self, key: str, value: Any, ttl: int) -> None:
        if ttl <= 0:
            return
        self._execute(
            "INSERT OR REPLACE INTO resolver_cache (key, value, expires_at) VALUES (?, ?, ?)",
            key,
            json.dumps(value),
            time.time() + ttl,
        )

    def clear(self) -> None:
        self._execute("DELETE FROM resolver_cache")

    def close(self) -> None:
        self._conn.close()
