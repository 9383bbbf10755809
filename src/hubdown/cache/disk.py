"""Persistent store backed by SQLite."""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any

from hubdown.cache.results import Found, Lookup, NotFound, StoreError
from hubdown.cache.stats import CacheStats

logger = logging.getLogger(__name__)

_DEFAULT_MAX_SIZE_MB = 500
DEFAULT_DB_PATH = Path.home() / ".hubdown" / "cache.db"


class DiskStore:
    """SQLite-backed store with LRU eviction.

    Values are stored as JSON; anything JSON cannot represent (dates in
    frontmatter, for instance) is stored as its string form.
    """

    def __init__(
        self,
        db_path: Path | None = None,
        max_size_mb: float = _DEFAULT_MAX_SIZE_MB,
    ) -> None:
        self._db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self._max_size_bytes = int(max_size_mb * 1024 * 1024)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.row_factory = sqlite3.Row
        self._stats = CacheStats()
        self._create_table()

    @property
    def path(self) -> Path:
        return self._db_path

    async def get(self, key: str) -> Lookup:
        try:
            row = self._conn.execute(
                "SELECT value FROM cache WHERE key = ?", (key,)
            ).fetchone()
            if row is None:
                self._stats.misses += 1
                return NotFound()
            value = json.loads(row["value"])
            # Update last_accessed for LRU
            self._conn.execute(
                "UPDATE cache SET last_accessed = ? WHERE key = ?",
                (time.time(), key),
            )
            self._conn.commit()
        except (sqlite3.Error, json.JSONDecodeError) as e:
            self._stats.errors += 1
            return StoreError(cause=e)
        self._stats.hits += 1
        return Found(value=value)

    async def put(self, key: str, value: dict[str, Any]) -> None:
        encoded = json.dumps(value, ensure_ascii=False, default=str)
        size = len(encoded.encode("utf-8"))
        self._evict_if_needed(size)
        now = time.time()
        self._conn.execute(
            """INSERT OR REPLACE INTO cache
               (key, value, created_at, last_accessed, size_bytes)
               VALUES (?, ?, ?, ?, ?)""",
            (key, encoded, now, now, size),
        )
        self._conn.commit()

    def clear(self) -> None:
        self._conn.execute("DELETE FROM cache")
        self._conn.commit()
        self._stats = CacheStats()

    def stats(self) -> CacheStats:
        return self._stats.model_copy(
            update={"entries": self.entry_count, "size_mb": self.size_mb}
        )

    @property
    def entry_count(self) -> int:
        row = self._conn.execute("SELECT COUNT(*) FROM cache").fetchone()
        return row[0]

    @property
    def size_mb(self) -> float:
        row = self._conn.execute("SELECT COALESCE(SUM(size_bytes), 0) FROM cache").fetchone()
        return row[0] / (1024 * 1024)

    def close(self) -> None:
        self._conn.close()

    def _create_table(self) -> None:
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS cache (
                key TEXT PRIMARY KEY,
                value TEXT,
                created_at REAL,
                last_accessed REAL,
                size_bytes INTEGER
            )
        """)
        self._conn.commit()

    def _evict_if_needed(self, new_entry_size: int) -> None:
        while True:
            row = self._conn.execute(
                "SELECT COALESCE(SUM(size_bytes), 0) FROM cache"
            ).fetchone()
            if row[0] + new_entry_size <= self._max_size_bytes:
                break
            # Remove oldest accessed
            oldest = self._conn.execute(
                "SELECT key FROM cache ORDER BY last_accessed ASC LIMIT 1"
            ).fetchone()
            if oldest is None:
                break
            logger.debug("Evicting cache entry %s", oldest[0][:12])
            self._conn.execute("DELETE FROM cache WHERE key = ?", (oldest[0],))
            self._conn.commit()
