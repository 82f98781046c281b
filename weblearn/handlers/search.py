from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from weblearn.config import SEARCH_MIN_QUERY
from weblearn.services.search import search, format_results

router = Router()


@router.message(Command("search"))
async def cmd_search(message: Message, command: CommandObject):
    query = (command.args or "").strip()
    if len(query) < SEARCH_MIN_QUERY:
        await message.answer(f"🔍 Type at least {SEARCH_MIN_QUERY} characters: /search css")
        return
    await message.answer(format_results(query, search(query)))
