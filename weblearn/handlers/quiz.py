import logging

from aiogram import Router, F
from aiogram.filters import Command, CommandObject
from aiogram.types import Message, CallbackQuery
from aiogram.fsm.context import FSMContext

from weblearn.exceptions import StorageError, UnknownCategoryError
from weblearn.handlers.common import edit_or_answer
from weblearn.keyboards.quiz_kb import category_keyboard, question_keyboard, results_keyboard
from weblearn.quiz.render import (
    format_question,
    format_results,
    format_share,
    render_question,
    render_results,
)
from weblearn.quiz.session import QuizController, QuizPhase
from weblearn.services.progress_tracker import record_score
from weblearn.states.flows import QuizFlow
from weblearn.storage.store import ProgressStore

logger = logging.getLogger(__name__)

router = Router()

CHOOSE_TEXT = "📚 Choose a quiz category:"
UNKNOWN_CATEGORY_TEXT = "⚠️ There is no quiz for that category yet."
SAVE_FAILED_TEXT = "⚠️ Could not save your result. Please press the button again."


async def load_controller(state: FSMContext) -> QuizController:
    data = await state.get_data()
    return QuizController.from_dict(data.get("quiz"))


async def save_controller(state: FSMContext, controller: QuizController):
    await state.update_data(quiz=controller.to_dict())


def current_screen(controller: QuizController):
    """Text and keyboard for whatever phase the controller is in."""
    if controller.phase is QuizPhase.IN_PROGRESS:
        view = render_question(controller.session)
        return format_question(view), question_keyboard(view)
    if controller.phase is QuizPhase.COMPLETED and controller.last_record is not None:
        view = render_results(controller.session, controller.last_record)
        return format_results(view), results_keyboard()
    return CHOOSE_TEXT, category_keyboard()


async def _show(message: Message, controller: QuizController, edit: bool = True):
    text, markup = current_screen(controller)
    if edit:
        await edit_or_answer(message, text, reply_markup=markup)
    else:
        await message.answer(text, reply_markup=markup)


async def _begin(message: Message, state: FSMContext, category: str, edit: bool) -> bool:
    """Start a quiz; unknown categories leave the state untouched."""
    controller = await load_controller(state)
    try:
        controller.start(category)
    except UnknownCategoryError:
        logger.info("Quiz requested for unknown category %r", category)
        return False
    await save_controller(state, controller)
    await state.set_state(QuizFlow.answering_question)
    await _show(message, controller, edit=edit)
    return True


@router.callback_query(F.data == "start_quiz")
async def choose_category(callback: CallbackQuery, state: FSMContext):
    await state.set_state(QuizFlow.choosing_category)
    await edit_or_answer(callback.message, CHOOSE_TEXT, reply_markup=category_keyboard())
    await callback.answer()


@router.message(Command("quiz"))
async def cmd_quiz(message: Message, state: FSMContext, command: CommandObject):
    category = (command.args or "").strip().lower()
    if category:
        if not await _begin(message, state, category, edit=False):
            await message.answer(UNKNOWN_CATEGORY_TEXT, reply_markup=category_keyboard())
        return

    await state.set_state(QuizFlow.choosing_category)
    await message.answer(CHOOSE_TEXT, reply_markup=category_keyboard())


@router.callback_query(F.data.startswith("quiz:cat:"))
async def category_selected(callback: CallbackQuery, state: FSMContext):
    category = callback.data.split(":", 2)[2]
    if not await _begin(callback.message, state, category, edit=True):
        await callback.answer(UNKNOWN_CATEGORY_TEXT, show_alert=True)
        return
    await callback.answer()


@router.callback_query(QuizFlow.answering_question, F.data.startswith("quiz:ans:"))
async def answer_selected(callback: CallbackQuery, state: FSMContext):
    controller = await load_controller(state)
    try:
        choice = int(callback.data.split(":", 2)[2])
    except ValueError:
        choice = None

    if not controller.record_answer(choice):
        await callback.answer("That option is not available.")
        return

    await save_controller(state, controller)
    await _show(callback.message, controller)
    await callback.answer()


@router.callback_query(QuizFlow.answering_question, F.data == "quiz:next")
async def next_question(callback: CallbackQuery, state: FSMContext, store: ProgressStore):
    controller = await load_controller(state)
    record = controller.advance()

    if record is not None:
        try:
            await record_score(store, record)
        except StorageError:
            # the stored quiz stays on the last question so Next can be pressed again
            logger.exception("Could not save quiz result for user %s", store.owner_id)
            await callback.answer(SAVE_FAILED_TEXT, show_alert=True)
            return
        await state.set_state(QuizFlow.viewing_results)

    await save_controller(state, controller)
    await _show(callback.message, controller)
    await callback.answer()


@router.callback_query(QuizFlow.answering_question, F.data == "quiz:prev")
async def previous_question(callback: CallbackQuery, state: FSMContext):
    controller = await load_controller(state)
    if controller.retreat():
        await save_controller(state, controller)
        await _show(callback.message, controller)
    await callback.answer()


@router.callback_query(F.data == "quiz:exit")
async def exit_quiz(callback: CallbackQuery, state: FSMContext):
    controller = await load_controller(state)
    controller.exit()
    await save_controller(state, controller)
    await state.set_state(QuizFlow.choosing_category)
    await _show(callback.message, controller)
    await callback.answer()


@router.callback_query(F.data == "quiz:retry")
async def retry_quiz(callback: CallbackQuery, state: FSMContext):
    controller = await load_controller(state)
    if controller.restart() is not None:
        await state.set_state(QuizFlow.answering_question)
    else:
        await state.set_state(QuizFlow.choosing_category)
    await save_controller(state, controller)
    await _show(callback.message, controller)
    await callback.answer()


@router.callback_query(F.data == "quiz:share")
async def share_results(callback: CallbackQuery, state: FSMContext):
    controller = await load_controller(state)
    if controller.phase is not QuizPhase.COMPLETED or controller.last_record is None:
        await callback.answer("Finish a quiz first to share your result.")
        return
    await callback.message.answer(format_share(controller.last_record))
    await callback.answer()


@router.callback_query(F.data.startswith("quiz:"))
async def stale_quiz_button(callback: CallbackQuery):
    """Buttons from a quiz that is no longer active."""
    await callback.answer("This quiz is no longer active. Start a new one with /quiz.")
