from aiogram import Router, F
from aiogram.filters import Command, CommandStart
from aiogram.types import Message, CallbackQuery
from aiogram.fsm.context import FSMContext

from weblearn.handlers.common import edit_or_answer
from weblearn.keyboards.main_menu import main_menu_keyboard

router = Router()

WELCOME_TEXT = (
    "👋 Hi! I'm WebLearn — your companion for learning HTML, CSS and JavaScript.\n\n"
    "Choose what you want to do:"
)

HELP_TEXT = (
    "📖 Commands:\n"
    "/quiz [html|css|javascript] — take a quiz\n"
    "/progress — your scores and overall progress\n"
    "/ask <question> — ask the assistant\n"
    "/search <text> — find a tutorial page\n"
    "/playground — run HTML/CSS/JS code\n"
    "/run <code> — preview code right away\n"
    "/save — save the last code you ran\n"
    "/load — run your saved code\n"
    "/example <basic|css-styling> — open a starter example\n"
    "/bookmark <url> [title], /bookmarks — bookmarks\n"
    "/note <text>, /notes — notes\n"
    "/theme — switch preview theme"
)


@router.message(CommandStart())
async def cmd_start(message: Message, state: FSMContext):
    await state.clear()
    await message.answer(WELCOME_TEXT, reply_markup=main_menu_keyboard())


@router.message(Command("help"))
async def cmd_help(message: Message):
    await message.answer(HELP_TEXT)


@router.callback_query(F.data == "go_home")
async def go_home(callback: CallbackQuery, state: FSMContext):
    await state.clear()
    await edit_or_answer(callback.message, WELCOME_TEXT, reply_markup=main_menu_keyboard())
    await callback.answer()
