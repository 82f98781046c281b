from aiogram.fsm.state import StatesGroup, State


class QuizFlow(StatesGroup):
    choosing_category = State()
    answering_question = State()
    viewing_results = State()


class AssistantFlow(StatesGroup):
    asking = State()


class PlaygroundFlow(StatesGroup):
    waiting_for_code = State()
