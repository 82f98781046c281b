from aiogram import Router, F
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, Message

from weblearn.handlers.common import edit_or_answer
from weblearn.keyboards.library_kb import notes_keyboard
from weblearn.services.notes import add_note, delete_note, list_notes, format_notes
from weblearn.storage.store import ProgressStore

router = Router()


@router.message(Command("note"))
async def cmd_note(message: Message, command: CommandObject, store: ProgressStore):
    note = await add_note(store, command.args or "")
    if note is None:
        await message.answer("Format: /note <text>")
        return
    await message.answer(f"🗒 Note #{note['id']} saved.")


@router.message(Command("notes"))
async def cmd_notes(message: Message, store: ProgressStore):
    notes = await list_notes(store)
    await message.answer(format_notes(notes), reply_markup=notes_keyboard(notes))


@router.callback_query(F.data.startswith("note:del:"))
async def note_delete(callback: CallbackQuery, store: ProgressStore):
    try:
        note_id = int(callback.data.split(":", 2)[2])
    except ValueError:
        note_id = -1

    if not await delete_note(store, note_id):
        await callback.answer("Note not found.")
        return

    notes = await list_notes(store)
    await edit_or_answer(callback.message, format_notes(notes), reply_markup=notes_keyboard(notes))
    await callback.answer("Note deleted.")
