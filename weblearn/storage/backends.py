"""Raw key-value backends: (owner_id, key) -> serialized blob."""
import logging
from typing import Optional, Protocol

import aiosqlite

from weblearn.exceptions import StorageError
from weblearn.storage.database import Database

logger = logging.getLogger(__name__)


class Backend(Protocol):
    async def get(self, owner_id: int, key: str) -> Optional[str]: ...

    async def set(self, owner_id: int, key: str, blob: str) -> None: ...


class MemoryBackend:
    """Dict-backed store, used in tests and when no database is configured."""

    def __init__(self):
        self._data: dict[tuple[int, str], str] = {}

    async def get(self, owner_id: int, key: str) -> Optional[str]:
        return self._data.get((owner_id, key))

    async def set(self, owner_id: int, key: str, blob: str) -> None:
        self._data[(owner_id, key)] = blob


class SqliteBackend:
    """kv_store table via aiosqlite."""

    def __init__(self, db: Database):
        self.db = db

    async def get(self, owner_id: int, key: str) -> Optional[str]:
        try:
            row = await self.db.fetchone(
                "SELECT value FROM kv_store WHERE owner_id = ? AND key = ?",
                (owner_id, key),
            )
        except aiosqlite.Error as e:
            raise StorageError(f"Read failed for {key!r}: {e}") from e
        return row["value"] if row else None

    async def set(self, owner_id: int, key: str, blob: str) -> None:
        try:
            await self.db.execute(
                """INSERT INTO kv_store (owner_id, key, value)
                   VALUES (?, ?, ?)
                   ON CONFLICT(owner_id, key) DO UPDATE SET
                       value = excluded.value,
                       updated_at = datetime('now')""",
                (owner_id, key, blob),
            )
        except aiosqlite.Error as e:
            raise StorageError(f"Write failed for {key!r}: {e}") from e
