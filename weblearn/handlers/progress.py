from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from weblearn.handlers.common import edit_or_answer
from weblearn.keyboards.main_menu import main_menu_keyboard
from weblearn.services.progress_tracker import format_history, format_weak_areas, format_overall_stats
from weblearn.storage.store import ProgressStore

router = Router()


async def build_progress_text(store: ProgressStore) -> str:
    history = await format_history(store)
    weak = await format_weak_areas(store)
    stats = await format_overall_stats(store)

    text = history
    if weak:
        text += "\n" + weak
    if stats:
        text += "\n" + stats
    return text


@router.callback_query(F.data == "my_progress")
async def show_progress(callback: CallbackQuery, store: ProgressStore):
    text = await build_progress_text(store)
    await edit_or_answer(callback.message, text, reply_markup=main_menu_keyboard())
    await callback.answer()


@router.message(Command("progress"))
async def cmd_progress(message: Message, store: ProgressStore):
    text = await build_progress_text(store)
    await message.answer(text, reply_markup=main_menu_keyboard())
