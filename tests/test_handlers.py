"""Tests for the aiogram handlers (mocked Telegram objects, real FSM storage)."""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from aiogram.types import BufferedInputFile

from weblearn.__main__ import build_dispatcher
from weblearn.exceptions import StorageError
from weblearn.handlers import assistant, bookmarks, notes, playground, progress, quiz, search, start
from weblearn.middleware.store import StoreMiddleware
from weblearn.quiz.session import QuizPhase
from weblearn.services.progress_tracker import get_history, get_progress
from weblearn.states.flows import AssistantFlow, PlaygroundFlow, QuizFlow
from weblearn.storage.backends import MemoryBackend
from weblearn.storage.store import StorageKey, StoreRegistry


class FailingBackend(MemoryBackend):
    """Memory backend whose writes can be switched off."""

    def __init__(self):
        super().__init__()
        self.failing = False

    async def set(self, owner_id, key, blob):
        if self.failing:
            raise StorageError("database is locked")
        await super().set(owner_id, key, blob)


def _command(args=None):
    return SimpleNamespace(args=args)


def _last_text(message) -> str:
    if message.edit_text.await_args is not None:
        return message.edit_text.await_args.args[0]
    return message.answer.await_args.args[0]


# ============================================================================
# QUIZ FLOW
# ============================================================================


class TestQuizHandlers:

    async def test_start_quiz_shows_categories(self, fsm_state, make_callback, message):
        callback = make_callback("start_quiz")
        await quiz.choose_category(callback, fsm_state)

        assert await fsm_state.get_state() == QuizFlow.choosing_category.state
        assert message.edit_text.await_args.args[0] == quiz.CHOOSE_TEXT
        callback.answer.assert_awaited_once()

    async def test_category_selected_shows_first_question(self, fsm_state, make_callback, message):
        await quiz.category_selected(make_callback("quiz:cat:html"), fsm_state)

        assert await fsm_state.get_state() == QuizFlow.answering_question.state
        assert "question 1 of 3" in _last_text(message)
        controller = await quiz.load_controller(fsm_state)
        assert controller.phase is QuizPhase.IN_PROGRESS

    async def test_unknown_category_warns_without_state_change(self, fsm_state, make_callback, message):
        callback = make_callback("quiz:cat:python")
        await quiz.category_selected(callback, fsm_state)

        callback.answer.assert_awaited_once_with(quiz.UNKNOWN_CATEGORY_TEXT, show_alert=True)
        assert await fsm_state.get_state() is None
        assert await fsm_state.get_data() == {}
        message.edit_text.assert_not_awaited()

    async def test_full_quiz_records_progress(self, fsm_state, make_callback, message, store):
        await quiz.category_selected(make_callback("quiz:cat:html"), fsm_state)
        # correct options for html are 0, 1, 2; miss the last one
        for choice in ("0", "1", "3"):
            await quiz.answer_selected(make_callback(f"quiz:ans:{choice}"), fsm_state)
            await quiz.next_question(make_callback("quiz:next"), fsm_state, store)

        assert await fsm_state.get_state() == QuizFlow.viewing_results.state
        text = _last_text(message)
        assert "2 of 3 (67%)" in text

        progress = await get_progress(store)
        assert progress["html"] == 67
        assert progress["overall"] == 22

    async def test_invalid_answer_rejected(self, fsm_state, make_callback, store):
        await quiz.category_selected(make_callback("quiz:cat:css"), fsm_state)

        callback = make_callback("quiz:ans:9")
        await quiz.answer_selected(callback, fsm_state)
        callback.answer.assert_awaited_once_with("That option is not available.")

        callback = make_callback("quiz:ans:x")
        await quiz.answer_selected(callback, fsm_state)
        callback.answer.assert_awaited_once_with("That option is not available.")

        controller = await quiz.load_controller(fsm_state)
        assert controller.session.answers == [None, None, None]

    async def test_previous_at_first_question_does_not_redraw(self, fsm_state, make_callback, message):
        await quiz.category_selected(make_callback("quiz:cat:css"), fsm_state)
        message.edit_text.reset_mock()

        await quiz.previous_question(make_callback("quiz:prev"), fsm_state)

        message.edit_text.assert_not_awaited()
        controller = await quiz.load_controller(fsm_state)
        assert controller.session.current_index == 0

    async def test_retry_keeps_history(self, fsm_state, make_callback, store):
        await quiz.category_selected(make_callback("quiz:cat:javascript"), fsm_state)
        for _ in range(3):
            await quiz.next_question(make_callback("quiz:next"), fsm_state, store)

        await quiz.retry_quiz(make_callback("quiz:retry"), fsm_state)

        controller = await quiz.load_controller(fsm_state)
        assert controller.phase is QuizPhase.IN_PROGRESS
        assert controller.session.current_index == 0
        assert controller.session.answers == [None, None, None]
        assert await fsm_state.get_state() == QuizFlow.answering_question.state
        assert len(await get_history(store, "javascript")) == 1

    async def test_exit_returns_to_categories(self, fsm_state, make_callback, message):
        await quiz.category_selected(make_callback("quiz:cat:html"), fsm_state)
        await quiz.exit_quiz(make_callback("quiz:exit"), fsm_state)

        controller = await quiz.load_controller(fsm_state)
        assert controller.phase is QuizPhase.SELECTING
        assert _last_text(message) == quiz.CHOOSE_TEXT

    async def test_cmd_quiz_with_category(self, fsm_state, message):
        await quiz.cmd_quiz(message, fsm_state, _command("CSS"))

        assert await fsm_state.get_state() == QuizFlow.answering_question.state
        assert "question 1 of 3" in message.answer.await_args.args[0]

    async def test_cmd_quiz_unknown_category(self, fsm_state, message):
        await quiz.cmd_quiz(message, fsm_state, _command("python"))

        assert message.answer.await_args.args[0] == quiz.UNKNOWN_CATEGORY_TEXT
        assert await fsm_state.get_state() is None

    async def test_result_kept_when_saving_fails(self, fsm_state, make_callback):
        backend = FailingBackend()
        store = StoreRegistry(backend).for_owner(12345)
        await quiz.category_selected(make_callback("quiz:cat:css"), fsm_state)
        for _ in range(2):
            await quiz.next_question(make_callback("quiz:next"), fsm_state, store)

        backend.failing = True
        callback = make_callback("quiz:next")
        await quiz.next_question(callback, fsm_state, store)

        callback.answer.assert_awaited_once_with(quiz.SAVE_FAILED_TEXT, show_alert=True)
        assert await fsm_state.get_state() == QuizFlow.answering_question.state
        controller = await quiz.load_controller(fsm_state)
        assert controller.phase is QuizPhase.IN_PROGRESS
        assert controller.session.is_last

        backend.failing = False
        await quiz.next_question(make_callback("quiz:next"), fsm_state, store)

        assert await fsm_state.get_state() == QuizFlow.viewing_results.state
        assert len(await get_history(store, "css")) == 1

    async def test_share_result(self, fsm_state, make_callback, message, store):
        await quiz.category_selected(make_callback("quiz:cat:css"), fsm_state)
        # correct options for css are 1, 1, 3
        for choice in ("1", "1", "3"):
            await quiz.answer_selected(make_callback(f"quiz:ans:{choice}"), fsm_state)
            await quiz.next_question(make_callback("quiz:next"), fsm_state, store)

        callback = make_callback("quiz:share")
        await quiz.share_results(callback, fsm_state)

        text = message.answer.await_args.args[0]
        assert "CSS quiz" in text
        assert "3 of 3 correct (100%)" in text
        callback.answer.assert_awaited_once()

    async def test_share_before_finishing(self, fsm_state, make_callback, message):
        await quiz.category_selected(make_callback("quiz:cat:html"), fsm_state)
        callback = make_callback("quiz:share")
        await quiz.share_results(callback, fsm_state)

        assert "Finish a quiz first" in callback.answer.await_args.args[0]
        message.answer.assert_not_awaited()

    async def test_stale_button(self, make_callback):
        callback = make_callback("quiz:next")
        await quiz.stale_quiz_button(callback)
        assert "no longer active" in callback.answer.await_args.args[0]


# ============================================================================
# OTHER SCREENS
# ============================================================================


class TestOtherHandlers:

    async def test_start_clears_state(self, fsm_state, message):
        await fsm_state.set_state(QuizFlow.answering_question)
        await start.cmd_start(message, fsm_state)
        assert await fsm_state.get_state() is None
        assert message.answer.await_args.args[0] == start.WELCOME_TEXT

    async def test_progress_screen(self, message, store):
        await store.set(StorageKey.PROGRESS, {"html": 80, "css": 100})
        await progress.cmd_progress(message, store)
        assert "Overall: 60%" in message.answer.await_args.args[0]

    async def test_ask_with_question(self, fsm_state, message):
        await assistant.cmd_ask(message, fsm_state, _command("what is flexbox"))
        assert "display: flex" in message.answer.await_args.args[0]

    async def test_ask_without_question_enters_flow(self, fsm_state, message):
        await assistant.cmd_ask(message, fsm_state, _command())
        assert await fsm_state.get_state() == AssistantFlow.asking.state

        message.text = "how do I write a link?"
        await assistant.question_entered(message)
        assert "href" in message.answer.await_args.args[0]

    async def test_search(self, message):
        await search.cmd_search(message, _command("css"))
        assert "CSS Styling" in message.answer.await_args.args[0]

    async def test_search_too_short(self, message):
        await search.cmd_search(message, _command("c"))
        assert "at least 2" in message.answer.await_args.args[0]

    async def test_bookmark_commands(self, message, store):
        await bookmarks.cmd_bookmark(message, _command("quiz.html Quiz page"), store)
        assert "Bookmarked: Quiz page" in message.answer.await_args.args[0]

        await bookmarks.cmd_bookmark(message, _command("quiz.html"), store)
        assert "already bookmarked" in message.answer.await_args.args[0]

        await bookmarks.cmd_bookmarks(message, store)
        assert "Quiz page — quiz.html" in message.answer.await_args.args[0]

    async def test_bookmark_delete_button(self, make_callback, message, store):
        await bookmarks.cmd_bookmark(message, _command("a.html"), store)
        callback = make_callback("bm:del:0")
        await bookmarks.delete_bookmark(callback, store)
        callback.answer.assert_awaited_once_with("Bookmark removed.")

        callback = make_callback("bm:del:0")
        await bookmarks.delete_bookmark(callback, store)
        callback.answer.assert_awaited_once_with("Bookmark not found.")

    async def test_note_commands(self, make_callback, message, store):
        await notes.cmd_note(message, _command("remember box-sizing"), store)
        assert "Note #1 saved" in message.answer.await_args.args[0]

        await notes.cmd_note(message, _command(), store)
        assert "Format" in message.answer.await_args.args[0]

        callback = make_callback("note:del:1")
        await notes.note_delete(callback, store)
        callback.answer.assert_awaited_once_with("Note deleted.")


class TestPlaygroundHandlers:

    async def test_code_received_sends_document(self, fsm_state, message, store):
        await playground.cmd_playground(message, fsm_state)
        assert await fsm_state.get_state() == PlaygroundFlow.waiting_for_code.state

        message.text = "<h1>Hello</h1>"
        await playground.code_received(message, fsm_state, store)

        document = message.answer_document.await_args.args[0]
        assert isinstance(document, BufferedInputFile)
        assert document.filename == "preview.html"
        assert b"<h1>Hello</h1>" in document.data

    async def test_empty_code_reports_error(self, fsm_state, message, store):
        await playground.cmd_run(message, fsm_state, _command("```css\n```"), store)
        message.answer_document.assert_not_awaited()
        assert "Nothing to run" in message.answer.await_args.args[0]

    async def test_save_after_run(self, fsm_state, message, store):
        await playground.cmd_save(message, fsm_state, store)
        assert "Nothing to save" in message.answer.await_args.args[0]

        await playground.cmd_run(message, fsm_state, _command("const x = 1;"), store)
        await playground.cmd_save(message, fsm_state, store)

        saved = await store.get(StorageKey.SAVED_CODE, {})
        assert saved["javascript"] == "const x = 1;"

    async def test_theme_toggle_affects_preview(self, fsm_state, message, store):
        await playground.cmd_theme(message, store)
        await playground.cmd_run(message, fsm_state, _command("```html\n<p>x</p>\n```"), store)
        document = message.answer_document.await_args.args[0]
        assert b'data-theme="dark"' in document.data

    async def test_unrecognised_snippet(self, fsm_state, message, store):
        await playground.cmd_run(message, fsm_state, _command("just some words"), store)
        message.answer_document.assert_not_awaited()
        assert "Couldn't tell" in message.answer.await_args.args[0]

    async def test_example_command(self, fsm_state, message, store):
        await playground.cmd_example(message, fsm_state, _command("css-styling"), store)
        document = message.answer_document.await_args.args[0]
        assert b'class="card"' in document.data

    async def test_unknown_example_lists_available(self, fsm_state, message, store):
        await playground.cmd_example(message, fsm_state, _command("react"), store)
        message.answer_document.assert_not_awaited()
        text = message.answer.await_args.args[0]
        assert "basic" in text
        assert "css-styling" in text

    async def test_load_command(self, fsm_state, message, store):
        await playground.cmd_load(message, fsm_state, store)
        assert "no saved code" in message.answer.await_args.args[0]

        await playground.cmd_run(message, fsm_state, _command("```html\n<p>saved</p>\n```"), store)
        await playground.cmd_save(message, fsm_state, store)
        message.answer_document.reset_mock()

        await playground.cmd_load(message, fsm_state, store)
        assert b"<p>saved</p>" in message.answer_document.await_args.args[0].data

    async def test_example_button(self, fsm_state, make_callback, message, store):
        await playground.load_example(make_callback("pg:example:basic"), fsm_state, store)
        message.answer_document.assert_awaited_once()


# ============================================================================
# WIRING
# ============================================================================


class TestWiring:

    async def test_middleware_injects_store(self):
        middleware = StoreMiddleware(StoreRegistry(MemoryBackend()))
        handler = AsyncMock(return_value="ok")
        event = MagicMock()
        event.from_user.id = 5
        data = {}

        result = await middleware(handler, event, data)

        assert result == "ok"
        assert data["store"].owner_id == 5

    async def test_middleware_drops_events_without_user(self):
        middleware = StoreMiddleware(StoreRegistry(MemoryBackend()))
        handler = AsyncMock()

        result = await middleware(handler, SimpleNamespace(), {})

        assert result is None
        handler.assert_not_awaited()

    def test_dispatcher_includes_all_routers(self):
        dp = build_dispatcher(StoreRegistry(MemoryBackend()))
        assert len(dp.sub_routers) == 8
