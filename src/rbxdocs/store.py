"""SQLite key-value store backing the snapshot cache.

Reads catch ``aiosqlite.Error`` and return ``None`` (a miss). Writes are
logged and reported as ``False`` on failure; a failed multi-key write is
rolled back so readers keep seeing the previous record in full.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import aiosqlite
import structlog

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

log = structlog.get_logger()

_CREATE_KV_TABLE = """
CREATE TABLE IF NOT EXISTS kv_store (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""


class KeyValueStore:
    """SQLite-backed string store implementing KeyValueStoreProtocol."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def init_db(self) -> None:
        """Create the table and set WAL mode. Called once at startup."""
        await self._db.execute("PRAGMA journal_mode = WAL")
        await self._db.execute(_CREATE_KV_TABLE)
        await self._db.commit()

    async def get(self, key: str) -> str | None:
        """Read a value. Returns ``None`` on miss or read failure."""
        try:
            cursor = await self._db.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = await cursor.fetchone()
            return None if row is None else row[0]
        except aiosqlite.Error:
            log.warning("store_read_error", key=key, exc_info=True)
            return None

    async def set(self, key: str, value: str) -> bool:
        return await self.set_many({key: value})

    async def set_many(self, items: Mapping[str, str]) -> bool:
        """Write every item in a single transaction.

        Non-fatal on failure; returns False when the write was rolled back.
        """
        try:
            await self._db.executemany(
                "INSERT OR REPLACE INTO kv_store (key, value) VALUES (?, ?)",
                list(items.items()),
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("store_write_error", keys=sorted(items), exc_info=True)
            await self._rollback()
            return False
        return True

    async def remove(self, key: str) -> bool:
        return await self.remove_many([key])

    async def remove_many(self, keys: Sequence[str]) -> bool:
        """Delete every key in a single transaction. Missing keys are ignored."""
        if not keys:
            return True
        placeholders = ", ".join("?" for _ in keys)
        try:
            await self._db.execute(
                f"DELETE FROM kv_store WHERE key IN ({placeholders})",
                tuple(keys),
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("store_write_error", keys=sorted(keys), exc_info=True)
            await self._rollback()
            return False
        return True

    async def _rollback(self) -> None:
        try:
            await self._db.rollback()
        except aiosqlite.Error:
            log.debug("store_rollback_failed", exc_info=True)
