"""SQLite cache for web search results (TTL 7 days)."""

from __future__ import annotations

import json
import sqlite3
import time
from pathlib import Path

from translation_verifier.models.search import SearchHit

DEFAULT_DB_PATH = Path.home() / ".translation-verifier" / "search-cache.db"
DEFAULT_TTL_DAYS = 7


class SearchCache:
    """SQLite-backed search hit cache keyed by query and result count."""

    def __init__(
        self,
        db_path: str | Path = DEFAULT_DB_PATH,
        ttl_days: int = DEFAULT_TTL_DAYS,
    ):
        self.db_path = Path(db_path)
        self.ttl_seconds = ttl_days * 86400
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS search_cache (
                    query TEXT NOT NULL,
                    max_results INTEGER NOT NULL,
                    hits_json TEXT NOT NULL,
                    cached_at REAL NOT NULL,
                    PRIMARY KEY (query, max_results)
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    @staticmethod
    def _key(query: str) -> str:
        return " ".join(query.split())

    def get(self, query: str, max_results: int) -> list[SearchHit] | None:
        """Get cached hits if present and not expired."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT hits_json, cached_at FROM search_cache WHERE query = ? AND max_results = ?",
                (self._key(query), max_results),
            ).fetchone()

        if row is None:
            return None

        hits_json, cached_at = row
        if time.time() - cached_at > self.ttl_seconds:
            self.delete(query, max_results)
            return None

        return [SearchHit(**item) for item in json.loads(hits_json)]

    def put(self, query: str, max_results: int, hits: list[SearchHit]) -> None:
        payload = json.dumps([hit.model_dump() for hit in hits], ensure_ascii=False)
        with self._connect() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO search_cache
                   (query, max_results, hits_json, cached_at)
                   VALUES (?, ?, ?, ?)""",
                (self._key(query), max_results, payload, time.time()),
            )

    def delete(self, query: str, max_results: int) -> None:
        with self._connect() as conn:
            conn.execute(
                "DELETE FROM search_cache WHERE query = ? AND max_results = ?",
                (self._key(query), max_results),
            )

    def clear(self) -> int:
        """Clear all cached entries. Returns count of deleted rows."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM search_cache")
            return cursor.rowcount

    def stats(self) -> dict:
        with self._connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM search_cache").fetchone()[0]
            expired = conn.execute(
                "SELECT COUNT(*) FROM search_cache WHERE ? - cached_at > ?",
                (time.time(), self.ttl_seconds),
            ).fetchone()[0]
        return {"total": total, "expired": expired, "active": total - expired}
