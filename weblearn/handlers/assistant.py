from aiogram import Router, F
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, Message
from aiogram.fsm.context import FSMContext

from weblearn.handlers.common import edit_or_answer
from weblearn.keyboards.main_menu import home_keyboard
from weblearn.services.assistant import answer
from weblearn.states.flows import AssistantFlow

router = Router()

ASK_PROMPT = "🤖 What would you like to know? Ask about HTML, CSS or JavaScript."


@router.message(Command("ask"))
async def cmd_ask(message: Message, state: FSMContext, command: CommandObject):
    if not command.args:
        await state.set_state(AssistantFlow.asking)
        await message.answer(ASK_PROMPT, reply_markup=home_keyboard())
        return
    await message.answer(answer(command.args))


@router.callback_query(F.data == "ask")
async def ask_button(callback: CallbackQuery, state: FSMContext):
    await state.set_state(AssistantFlow.asking)
    await edit_or_answer(callback.message, ASK_PROMPT, reply_markup=home_keyboard())
    await callback.answer()


@router.message(AssistantFlow.asking, F.text, ~F.text.startswith("/"))
async def question_entered(message: Message):
    """Stay in the asking state so follow-up questions keep working."""
    await message.answer(answer(message.text), reply_markup=home_keyboard())
