"""Scoring of completed quiz sessions."""
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Optional, Sequence

from weblearn.content.question_bank import Question


@dataclass(frozen=True)
class ScoreRecord:
    """Result of one completed quiz attempt. Appended to history, never mutated."""
    category: str
    correct_count: int
    total_count: int
    percentage: int
    timestamp: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> Optional["ScoreRecord"]:
        """Build a record from a stored dict, None if the dict is unusable."""
        try:
            return cls(
                category=str(data["category"]),
                correct_count=int(data["correct_count"]),
                total_count=int(data["total_count"]),
                percentage=int(data["percentage"]),
                timestamp=str(data.get("timestamp", "")),
            )
        except (KeyError, TypeError, ValueError):
            return None


def round_half_up(numerator: int, denominator: int) -> int:
    """Integer round(numerator / denominator) with halves rounded up."""
    return (2 * numerator + denominator) // (2 * denominator)


def percentage(correct: int, total: int) -> int:
    """round(100 * correct / total), 0 for an empty quiz."""
    if total <= 0:
        return 0
    correct = max(0, min(correct, total))
    return round_half_up(100 * correct, total)


def is_correct(question: Question, answer: Optional[int]) -> bool:
    return answer is not None and answer == question.correct_option


def count_correct(questions: Sequence[Question], answers: Sequence[Optional[int]]) -> int:
    """Number of indices where the answer matches. Unanswered counts as incorrect."""
    return sum(1 for q, a in zip(questions, answers) if is_correct(q, a))


def per_question_correctness(session) -> list[bool]:
    return [is_correct(q, a) for q, a in zip(session.questions, session.answers)]


def score_session(session, now: Optional[datetime] = None) -> ScoreRecord:
    """Compute the ScoreRecord for a session's current answers."""
    total = len(session.questions)
    correct = count_correct(session.questions, session.answers)
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    return ScoreRecord(
        category=session.category,
        correct_count=correct,
        total_count=total,
        percentage=percentage(correct, total),
        timestamp=stamp,
    )
