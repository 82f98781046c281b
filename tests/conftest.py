"""Shared fixtures for WebLearn tests."""
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey as FSMKey
from aiogram.fsm.storage.memory import MemoryStorage

from weblearn.content.question_bank import Question
from weblearn.quiz.session import QuizController
from weblearn.storage.backends import MemoryBackend
from weblearn.storage.store import StoreRegistry


def make_question(correct: int, prompt: str = "Q?") -> Question:
    return Question(
        prompt=prompt,
        options=("a", "b", "c", "d"),
        correct_option=correct,
        explanation=f"Answer is option {correct}.",
    )


@pytest.fixture
def small_bank():
    """html with correct answers [0, 1, 0], css with a single question."""
    return {
        "html": (make_question(0, "H1"), make_question(1, "H2"), make_question(0, "H3")),
        "css": (make_question(2, "C1"),),
    }


@pytest.fixture
def controller(small_bank):
    return QuizController(small_bank)


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return StoreRegistry(backend).for_owner(12345)


@pytest.fixture
def fsm_state():
    """Real FSMContext over in-memory storage."""
    return FSMContext(
        storage=MemoryStorage(),
        key=FSMKey(bot_id=1, chat_id=12345, user_id=12345),
    )


@pytest.fixture
def message():
    msg = MagicMock()
    msg.answer = AsyncMock()
    msg.answer_document = AsyncMock()
    msg.edit_text = AsyncMock()
    return msg


@pytest.fixture
def make_callback(message):
    def _make(data: str):
        callback = MagicMock()
        callback.data = data
        callback.message = message
        callback.answer = AsyncMock()
        return callback
    return _make
