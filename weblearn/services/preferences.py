from weblearn.storage.store import ProgressStore, StorageKey

THEMES = ("light", "dark")
DEFAULT_THEME = "light"


async def get_theme(store: ProgressStore) -> str:
    theme = await store.get(StorageKey.THEME, DEFAULT_THEME)
    return theme if theme in THEMES else DEFAULT_THEME


async def toggle_theme(store: ProgressStore) -> str:
    """Flip light <-> dark and return the new theme."""
    async with store.lock:
        current = await get_theme(store)
        new_theme = "dark" if current == "light" else "light"
        await store.set(StorageKey.THEME, new_theme)
    return new_theme
