import logging

from aiogram import Router, F
from aiogram.filters import Command, CommandObject
from aiogram.types import BufferedInputFile, CallbackQuery, Message
from aiogram.fsm.context import FSMContext

from weblearn.config import settings
from weblearn.exceptions import PreviewError
from weblearn.handlers.common import edit_or_answer
from weblearn.keyboards.library_kb import playground_keyboard
from weblearn.services.playground import (
    EXAMPLES,
    CodeSubmission,
    compose_document,
    compose_message,
    load_code,
    save_code,
)
from weblearn.services.preferences import get_theme, toggle_theme
from weblearn.states.flows import PlaygroundFlow
from weblearn.storage.store import ProgressStore

logger = logging.getLogger(__name__)

router = Router()

PLAYGROUND_TEXT = (
    "💻 Code playground\n\n"
    "Send your code in the next message. Use ```html, ```css and ```js blocks "
    "to combine several languages, or send a single snippet.\n"
    "I'll reply with a preview page you can open in a browser."
)


def _submission_to_dict(submission: CodeSubmission) -> dict:
    return {"html": submission.html, "css": submission.css, "javascript": submission.javascript}


async def _send_document(message: Message, state: FSMContext, submission: CodeSubmission, document: str):
    await state.update_data(last_code=_submission_to_dict(submission))
    await message.answer_document(
        BufferedInputFile(document.encode("utf-8"), filename=settings.PREVIEW_FILENAME),
        caption="✅ Preview ready. Open the file in a browser. /save keeps this code.",
    )


async def send_preview(message: Message, state: FSMContext, store: ProgressStore, submission: CodeSubmission):
    """Compose the document and send it as a file; errors are reported as text."""
    theme = await get_theme(store)
    try:
        document = compose_document(submission, theme=theme)
    except PreviewError as e:
        await message.answer(f"⚠️ {e}")
        return
    await _send_document(message, state, submission, document)


async def preview_text(message: Message, state: FSMContext, store: ProgressStore, text: str):
    theme = await get_theme(store)
    try:
        submission, document = compose_message(text, theme=theme)
    except PreviewError as e:
        await message.answer(f"⚠️ {e}")
        return
    await _send_document(message, state, submission, document)


@router.message(Command("playground"))
async def cmd_playground(message: Message, state: FSMContext):
    await state.set_state(PlaygroundFlow.waiting_for_code)
    await message.answer(PLAYGROUND_TEXT, reply_markup=playground_keyboard())


@router.callback_query(F.data == "playground")
async def playground_button(callback: CallbackQuery, state: FSMContext):
    await state.set_state(PlaygroundFlow.waiting_for_code)
    await edit_or_answer(callback.message, PLAYGROUND_TEXT, reply_markup=playground_keyboard())
    await callback.answer()


@router.message(Command("run"))
async def cmd_run(message: Message, state: FSMContext, command: CommandObject, store: ProgressStore):
    if not command.args:
        await state.set_state(PlaygroundFlow.waiting_for_code)
        await message.answer(PLAYGROUND_TEXT)
        return
    await preview_text(message, state, store, command.args)


@router.message(PlaygroundFlow.waiting_for_code, F.text, ~F.text.startswith("/"))
async def code_received(message: Message, state: FSMContext, store: ProgressStore):
    await preview_text(message, state, store, message.text)


@router.message(Command("save"))
async def cmd_save(message: Message, state: FSMContext, store: ProgressStore):
    data = await state.get_data()
    last = data.get("last_code")
    if not last:
        await message.answer("Nothing to save yet. Run some code first with /run or /playground.")
        return
    await save_code(store, CodeSubmission(**last))
    await message.answer("💾 Code saved.")


async def _preview_saved(message: Message, state: FSMContext, store: ProgressStore):
    submission = await load_code(store)
    if submission is None:
        await message.answer("📂 You have no saved code yet.")
        return
    await send_preview(message, state, store, submission)


async def _preview_example(message: Message, state: FSMContext, store: ProgressStore, name: str):
    submission = EXAMPLES.get(name)
    if submission is None:
        await message.answer(f"⚠️ Unknown example. Available: {', '.join(EXAMPLES)}.")
        return
    await message.answer(f"📄 Example “{name}” loaded.")
    await send_preview(message, state, store, submission)


@router.message(Command("load"))
async def cmd_load(message: Message, state: FSMContext, store: ProgressStore):
    await _preview_saved(message, state, store)


@router.callback_query(F.data == "pg:load")
async def load_saved(callback: CallbackQuery, state: FSMContext, store: ProgressStore):
    await callback.answer()
    await _preview_saved(callback.message, state, store)


@router.message(Command("example"))
async def cmd_example(message: Message, state: FSMContext, command: CommandObject, store: ProgressStore):
    await _preview_example(message, state, store, (command.args or "").strip().lower())


@router.callback_query(F.data.startswith("pg:example:"))
async def load_example(callback: CallbackQuery, state: FSMContext, store: ProgressStore):
    await callback.answer()
    await _preview_example(callback.message, state, store, callback.data.split(":", 2)[2])


@router.callback_query(F.data == "pg:theme")
async def theme_button(callback: CallbackQuery, store: ProgressStore):
    theme = await toggle_theme(store)
    await callback.answer(f"Preview theme: {theme}")


@router.message(Command("theme"))
async def cmd_theme(message: Message, store: ProgressStore):
    theme = await toggle_theme(store)
    icon = "☀️" if theme == "dark" else "🌙"
    await message.answer(f"{icon} Preview theme switched to {theme}.")
