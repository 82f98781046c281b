import logging
from datetime import datetime, timezone

from weblearn.storage.store import ProgressStore, StorageKey

logger = logging.getLogger(__name__)


async def add_bookmark(store: ProgressStore, title: str, url: str) -> bool:
    """Add a bookmark. Returns False if the url is already bookmarked."""
    async with store.lock:
        bookmarks = await store.get(StorageKey.BOOKMARKS, [])
        if any(isinstance(b, dict) and b.get("url") == url for b in bookmarks):
            return False
        bookmarks.append({
            "title": title,
            "url": url,
            "date": datetime.now(timezone.utc).isoformat(),
        })
        await store.set(StorageKey.BOOKMARKS, bookmarks)
    return True


async def list_bookmarks(store: ProgressStore) -> list[dict]:
    bookmarks = await store.get(StorageKey.BOOKMARKS, [])
    return [b for b in bookmarks if isinstance(b, dict) and b.get("url")]


async def remove_bookmark(store: ProgressStore, index: int) -> bool:
    """Remove by position in list_bookmarks(). Returns False if out of range."""
    async with store.lock:
        bookmarks = await store.get(StorageKey.BOOKMARKS, [])
        valid = [b for b in bookmarks if isinstance(b, dict) and b.get("url")]
        if not 0 <= index < len(valid):
            return False
        del valid[index]
        await store.set(StorageKey.BOOKMARKS, valid)
    return True


def format_bookmarks(bookmarks: list[dict]) -> str:
    if not bookmarks:
        return "📚 No bookmarks yet. Add one with /bookmark <url> [title]."
    lines = ["📚 Bookmarks:\n"]
    for i, b in enumerate(bookmarks, start=1):
        lines.append(f"{i}. {b.get('title') or b['url']} — {b['url']}")
    return "\n".join(lines)
