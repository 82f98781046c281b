import logging
from datetime import datetime, timezone
from typing import Optional

from weblearn.storage.store import ProgressStore, StorageKey

logger = logging.getLogger(__name__)

MAX_NOTE_LENGTH = 2000


def _valid(note) -> bool:
    return isinstance(note, dict) and isinstance(note.get("id"), int) and isinstance(note.get("text"), str)


async def add_note(store: ProgressStore, text: str) -> Optional[dict]:
    """Save a note. Empty text is rejected with None."""
    text = (text or "").strip()
    if not text:
        return None
    text = text[:MAX_NOTE_LENGTH]

    async with store.lock:
        notes = [n for n in await store.get(StorageKey.NOTES, []) if _valid(n)]
        next_id = max((n["id"] for n in notes), default=0) + 1
        note = {
            "id": next_id,
            "text": text,
            "date": datetime.now(timezone.utc).isoformat(),
        }
        notes.append(note)
        await store.set(StorageKey.NOTES, notes)
    return note


async def list_notes(store: ProgressStore) -> list[dict]:
    return [n for n in await store.get(StorageKey.NOTES, []) if _valid(n)]


async def delete_note(store: ProgressStore, note_id: int) -> bool:
    async with store.lock:
        notes = [n for n in await store.get(StorageKey.NOTES, []) if _valid(n)]
        remaining = [n for n in notes if n["id"] != note_id]
        if len(remaining) == len(notes):
            return False
        await store.set(StorageKey.NOTES, remaining)
    return True


def format_notes(notes: list[dict]) -> str:
    if not notes:
        return "🗒 No notes yet. Write one with /note <text>."
    lines = ["🗒 Your notes:\n"]
    for n in notes:
        lines.append(f"#{n['id']}: {n['text']}")
    return "\n".join(lines)
