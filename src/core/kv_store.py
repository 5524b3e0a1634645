"""Key-value stores holding per-account state.

Two backends share one async interface: an in-memory dict (tests, ephemeral
sessions) and a single-table SQLite file through aiosqlite.
"""

import asyncio
import fnmatch
import logging
import threading
from pathlib import Path
from typing import Protocol

import aiosqlite

from src.core.config import constants, settings
from src.core.errors import StorageError


logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Async string key-value store."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> bool: ...

    async def delete(self, *keys: str) -> bool: ...

    async def keys(self, pattern: str) -> list[str]: ...

    async def close(self) -> None: ...


class InMemoryStore:
    """Thread-safe in-memory key-value store."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    async def get(self, key: str) -> str | None:
        """Get value for key.

        Args:
            key: Storage key

        Returns:
            Stored value or None if not found
        """
        with self._lock:
            return self._data.get(key)

    async def set(self, key: str, value: str) -> bool:
        """Store value under key, replacing any previous value."""
        with self._lock:
            self._data[key] = value
            logger.debug("Stored key: %s", key)
            return True

    async def delete(self, *keys: str) -> bool:
        """Delete one or more keys.

        Returns:
            True if at least one key was given
        """
        if not keys:
            return False

        with self._lock:
            for key in keys:
                self._data.pop(key, None)
            logger.debug("Deleted %d key(s)", len(keys))
            return True

    async def keys(self, pattern: str) -> list[str]:
        """Find keys matching a glob pattern (e.g., 'me@example.com:*')."""
        with self._lock:
            return [key for key in self._data if fnmatch.fnmatch(key, pattern)]

    async def close(self) -> None:
        """Close store (no-op for in-memory store)."""
        logger.info("In-memory store closed")


class SQLiteStore:
    """Key-value store backed by one SQLite table."""

    def __init__(self, db_path: str | None = None) -> None:
        self._path = Path(db_path or settings.sqlite_db_path).resolve()
        self._table = constants.SQLITE_TABLE_NAME
        self._conn: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    async def _connection(self) -> aiosqlite.Connection:
        """Open the database on first use and create the table."""
        if self._conn is not None:
            return self._conn

        async with self._lock:
            # Double-check after acquiring lock
            if self._conn is not None:
                return self._conn

            self._path.parent.mkdir(parents=True, exist_ok=True)
            conn = await aiosqlite.connect(str(self._path))
            await conn.execute("PRAGMA journal_mode = WAL")
            await conn.execute(
                f"CREATE TABLE IF NOT EXISTS {self._table} (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )
            await conn.commit()
            self._conn = conn

            logger.info("Opened SQLite store", extra={"db_path": str(self._path)})
            return conn

    async def get(self, key: str) -> str | None:
        """Get value for key, or None if absent."""
        try:
            conn = await self._connection()
            cursor = await conn.execute(f"SELECT value FROM {self._table} WHERE key = ?", (key,))  # noqa: S608
            row = await cursor.fetchone()
            return row[0] if row else None
        except aiosqlite.Error as e:
            logger.error("kv_get_failed", extra={"key": key, "error": str(e)})
            raise StorageError(f"Failed to read {key}: {e}") from e

    async def set(self, key: str, value: str) -> bool:
        """Insert or replace the value stored under key."""
        try:
            conn = await self._connection()
            await conn.execute(
                f"INSERT INTO {self._table} (key, value) VALUES (?, ?) "  # noqa: S608
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            await conn.commit()
            return True
        except aiosqlite.Error as e:
            logger.error("kv_set_failed", extra={"key": key, "error": str(e)})
            raise StorageError(f"Failed to write {key}: {e}") from e

    async def delete(self, *keys: str) -> bool:
        """Delete one or more keys."""
        if not keys:
            return False

        try:
            conn = await self._connection()
            await conn.executemany(f"DELETE FROM {self._table} WHERE key = ?", [(key,) for key in keys])  # noqa: S608
            await conn.commit()
            logger.debug("Deleted %d key(s)", len(keys))
            return True
        except aiosqlite.Error as e:
            logger.error("kv_delete_failed", extra={"keys": list(keys), "error": str(e)})
            raise StorageError(f"Failed to delete keys: {e}") from e

    async def keys(self, pattern: str) -> list[str]:
        """Find keys matching a glob pattern."""
        try:
            conn = await self._connection()
            cursor = await conn.execute(f"SELECT key FROM {self._table} WHERE key GLOB ?", (pattern,))  # noqa: S608
            rows = await cursor.fetchall()
            return [row[0] for row in rows]
        except aiosqlite.Error as e:
            logger.error("kv_keys_failed", extra={"pattern": pattern, "error": str(e)})
            raise StorageError(f"Failed to list keys: {e}") from e

    async def close(self) -> None:
        """Close the SQLite connection if open."""
        if self._conn is None:
            return
        await self._conn.close()
        self._conn = None
        logger.info("Closed SQLite store", extra={"db_path": str(self._path)})


def get_store() -> KeyValueStore:
    """Build the backend selected by ``settings.storage_backend``."""
    if settings.storage_backend == "sqlite":
        return SQLiteStore()
    return InMemoryStore()
