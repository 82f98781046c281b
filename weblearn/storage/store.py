"""Per-user JSON blob store on top of a key-value backend."""
import asyncio
import copy
import json
import logging
import weakref
from enum import Enum
from typing import Any, Callable, Optional

from weblearn.storage.backends import Backend

logger = logging.getLogger(__name__)


class StorageKey(str, Enum):
    PROGRESS = "progress"
    QUIZ_RESULTS = "quiz-results"
    NOTES = "notes"
    BOOKMARKS = "bookmarks"
    SAVED_CODE = "saved-code"
    THEME = "theme"


class ProgressStore:
    """Reads and writes JSON values for one owner.

    Absent, malformed or wrongly shaped values read as a copy of the default.
    """

    def __init__(self, backend: Backend, owner_id: int, lock: Optional[asyncio.Lock] = None):
        self.backend = backend
        self.owner_id = owner_id
        self._lock = lock or asyncio.Lock()

    @property
    def lock(self) -> asyncio.Lock:
        """Held by update(); take it directly for a multi-step read-modify-write."""
        return self._lock

    async def get(self, key: StorageKey, default: Any = None) -> Any:
        blob = await self.backend.get(self.owner_id, key.value)
        if blob is None:
            return copy.deepcopy(default)
        try:
            value = json.loads(blob)
        except (json.JSONDecodeError, TypeError):
            logger.warning("Malformed blob for %s (owner %s), using default", key.value, self.owner_id)
            return copy.deepcopy(default)
        if default is not None and not isinstance(value, type(default)):
            logger.warning(
                "Unexpected %s for %s (owner %s), using default",
                type(value).__name__, key.value, self.owner_id,
            )
            return copy.deepcopy(default)
        return value

    async def set(self, key: StorageKey, value: Any) -> None:
        await self.backend.set(self.owner_id, key.value, json.dumps(value, ensure_ascii=False))

    async def update(self, key: StorageKey, default: Any, fn: Callable[[Any], Any]) -> Any:
        """Read, apply fn, write back. fn may mutate in place or return a new value."""
        async with self._lock:
            value = await self.get(key, default)
            result = fn(value)
            if result is not None:
                value = result
            await self.set(key, value)
            return value


class StoreRegistry:
    """Hands out ProgressStores that share one lock per owner."""

    def __init__(self, backend: Backend):
        self.backend = backend
        # a lock lives as long as some store for that owner does
        self._locks: weakref.WeakValueDictionary[int, asyncio.Lock] = weakref.WeakValueDictionary()

    def for_owner(self, owner_id: int) -> ProgressStore:
        lock = self._locks.get(owner_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[owner_id] = lock
        return ProgressStore(self.backend, owner_id, lock)
