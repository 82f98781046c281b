from aiogram import Router, F
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, Message

from weblearn.handlers.common import edit_or_answer
from weblearn.keyboards.library_kb import bookmarks_keyboard
from weblearn.services.bookmarks import add_bookmark, list_bookmarks, remove_bookmark, format_bookmarks
from weblearn.storage.store import ProgressStore

router = Router()


@router.message(Command("bookmark"))
async def cmd_bookmark(message: Message, command: CommandObject, store: ProgressStore):
    parts = (command.args or "").split(maxsplit=1)
    if not parts:
        await message.answer("Format: /bookmark <url> [title]\nExample: /bookmark css-tutorial.html#flexbox Flexbox")
        return

    url = parts[0]
    title = parts[1].strip() if len(parts) > 1 else url
    if await add_bookmark(store, title, url):
        await message.answer(f"🔖 Bookmarked: {title}")
    else:
        await message.answer("⚠️ This page is already bookmarked.")


@router.message(Command("bookmarks"))
async def cmd_bookmarks(message: Message, store: ProgressStore):
    bookmarks = await list_bookmarks(store)
    await message.answer(format_bookmarks(bookmarks), reply_markup=bookmarks_keyboard(bookmarks))


@router.callback_query(F.data.startswith("bm:del:"))
async def delete_bookmark(callback: CallbackQuery, store: ProgressStore):
    try:
        index = int(callback.data.split(":", 2)[2])
    except ValueError:
        index = -1

    if not await remove_bookmark(store, index):
        await callback.answer("Bookmark not found.")
        return

    bookmarks = await list_bookmarks(store)
    await edit_or_answer(callback.message, format_bookmarks(bookmarks), reply_markup=bookmarks_keyboard(bookmarks))
    await callback.answer("Bookmark removed.")
