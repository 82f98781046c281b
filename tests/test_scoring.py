"""Tests for scoring and the question bank."""
from datetime import datetime, timezone

import pytest

from weblearn.config import CATEGORIES
from weblearn.content.question_bank import QUESTION_BANK, Question, get_questions
from weblearn.quiz.scoring import (
    ScoreRecord,
    count_correct,
    percentage,
    round_half_up,
    score_session,
)
from weblearn.quiz.session import QuizSession

from conftest import make_question


class TestQuestionBank:

    def test_every_category_present(self):
        assert set(QUESTION_BANK) == set(CATEGORIES)

    def test_questions_are_well_formed(self):
        for questions in QUESTION_BANK.values():
            assert len(questions) == 3
            for q in questions:
                assert len(q.options) == 4
                assert 0 <= q.correct_option < 4

    def test_unknown_category(self):
        assert get_questions("python") is None
        assert get_questions("html") is QUESTION_BANK["html"]

    def test_question_rejects_wrong_option_count(self):
        with pytest.raises(ValueError):
            Question(prompt="?", options=("a", "b"), correct_option=0, explanation="")

    def test_question_rejects_bad_correct_index(self):
        with pytest.raises(ValueError):
            Question(prompt="?", options=("a", "b", "c", "d"), correct_option=4, explanation="")


class TestPercentage:

    def test_two_of_three(self):
        assert percentage(2, 3) == 67

    def test_one_of_three(self):
        assert percentage(1, 3) == 33

    def test_half_rounds_up(self):
        # 12.5 and 62.5 would go to even with round()
        assert percentage(1, 8) == 13
        assert percentage(5, 8) == 63
        assert round_half_up(5, 2) == 3

    def test_empty_quiz_is_zero(self):
        assert percentage(0, 0) == 0

    def test_always_int_in_range(self):
        for total in range(1, 12):
            for correct in range(total + 1):
                value = percentage(correct, total)
                assert isinstance(value, int)
                assert 0 <= value <= 100


class TestCountCorrect:

    def test_scenario_html(self):
        questions = [make_question(0), make_question(1), make_question(0)]
        assert count_correct(questions, [0, 1, 2]) == 2

    def test_unanswered_counts_as_incorrect(self):
        questions = [make_question(0), make_question(1)]
        assert count_correct(questions, [None, None]) == 0
        assert count_correct(questions, [0, None]) == 1

    def test_matches_index_count_for_all_answer_combinations(self):
        questions = [make_question(0), make_question(3)]
        for a in [None, 0, 1, 2, 3]:
            for b in [None, 0, 1, 2, 3]:
                expected = int(a == 0) + int(b == 3)
                assert count_correct(questions, [a, b]) == expected


class TestScoreSession:

    def test_record_fields(self):
        session = QuizSession(
            category="html",
            questions=(make_question(0), make_question(1), make_question(0)),
            answers=[0, 1, 2],
        )
        now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        record = score_session(session, now=now)

        assert record == ScoreRecord(
            category="html",
            correct_count=2,
            total_count=3,
            percentage=67,
            timestamp="2026-01-02T03:04:05+00:00",
        )

    def test_from_dict_round_trip_and_garbage(self):
        record = ScoreRecord("css", 1, 3, 33, "2026-01-01T00:00:00+00:00")
        assert ScoreRecord.from_dict(record.to_dict()) == record
        assert ScoreRecord.from_dict({"category": "css"}) is None
        assert ScoreRecord.from_dict({"category": "css", "correct_count": "x",
                                      "total_count": 3, "percentage": 0}) is None
