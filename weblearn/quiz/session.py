"""Quiz state machine: Selecting -> InProgress -> Completed."""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Sequence

from weblearn.content.question_bank import QUESTION_BANK, Question, get_questions
from weblearn.exceptions import UnknownCategoryError
from weblearn.quiz.scoring import ScoreRecord, score_session

logger = logging.getLogger(__name__)


class QuizPhase(str, Enum):
    SELECTING = "selecting"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class QuizSession:
    """One attempt at a category. Owned by a QuizController."""
    category: str
    questions: tuple[Question, ...]
    current_index: int = 0
    answers: list[Optional[int]] = field(default_factory=list)

    def __post_init__(self):
        if not self.answers:
            self.answers = [None] * len(self.questions)

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Question:
        return self.questions[self.current_index]

    @property
    def is_first(self) -> bool:
        return self.current_index == 0

    @property
    def is_last(self) -> bool:
        return self.current_index == len(self.questions) - 1


def _is_valid_choice(choice, question: Question) -> bool:
    if isinstance(choice, bool) or not isinstance(choice, int):
        return False
    return 0 <= choice < len(question.options)


class QuizController:
    """Owns the active QuizSession and drives its transitions.

    All transitions are synchronous and complete before returning. Invalid
    navigation and invalid answers are no-ops, not errors.
    """

    def __init__(self, bank: Optional[Mapping[str, Sequence[Question]]] = None):
        self.bank = bank if bank is not None else QUESTION_BANK
        self.phase = QuizPhase.SELECTING
        self.session: Optional[QuizSession] = None
        self.last_record: Optional[ScoreRecord] = None

    def start(self, category: str) -> QuizSession:
        """Load a category and enter InProgress at the first question."""
        questions = get_questions(category, self.bank)
        if not questions:
            raise UnknownCategoryError(category)
        self.session = QuizSession(category=category, questions=tuple(questions))
        self.phase = QuizPhase.IN_PROGRESS
        self.last_record = None
        logger.debug("Quiz started: %s (%d questions)", category, len(questions))
        return self.session

    def record_answer(self, choice) -> bool:
        """Store the chosen option for the current question. Returns False if rejected."""
        if self.phase is not QuizPhase.IN_PROGRESS or self.session is None:
            return False
        if not _is_valid_choice(choice, self.session.current_question):
            logger.warning("Rejected answer %r for question %d", choice, self.session.current_index)
            return False
        self.session.answers[self.session.current_index] = choice
        return True

    def advance(self) -> Optional[ScoreRecord]:
        """Move to the next question, or complete the quiz on the last one.

        Returns the ScoreRecord when this call completes the quiz, otherwise None.
        """
        if self.phase is not QuizPhase.IN_PROGRESS or self.session is None:
            return None
        if not self.session.is_last:
            self.session.current_index += 1
            return None
        self.phase = QuizPhase.COMPLETED
        self.last_record = score_session(self.session)
        logger.info(
            "Quiz completed: %s %d/%d (%d%%)",
            self.last_record.category,
            self.last_record.correct_count,
            self.last_record.total_count,
            self.last_record.percentage,
        )
        return self.last_record

    def retreat(self) -> bool:
        """Move back one question. Returns False when nothing moved."""
        if self.phase is not QuizPhase.IN_PROGRESS or self.session is None:
            return False
        if self.session.is_first:
            return False
        self.session.current_index -= 1
        return True

    def exit(self) -> None:
        self.session = None
        self.last_record = None
        self.phase = QuizPhase.SELECTING

    def restart(self) -> Optional[QuizSession]:
        """Re-enter InProgress on the same category with answers cleared."""
        if self.session is None:
            return None
        return self.start(self.session.category)

    # --- FSM storage round trip -------------------------------------------

    def to_dict(self) -> dict:
        data = {"phase": self.phase.value}
        if self.session is not None:
            data["category"] = self.session.category
            data["current_index"] = self.session.current_index
            data["answers"] = list(self.session.answers)
        if self.last_record is not None:
            data["last_record"] = self.last_record.to_dict()
        return data

    @classmethod
    def from_dict(
        cls,
        data: Optional[dict],
        bank: Optional[Mapping[str, Sequence[Question]]] = None,
    ) -> "QuizController":
        """Restore a controller; anything inconsistent yields a fresh Selecting one."""
        controller = cls(bank)
        if not data:
            return controller
        try:
            phase = QuizPhase(data.get("phase", QuizPhase.SELECTING.value))
        except ValueError:
            logger.warning("Discarding quiz state with unknown phase: %r", data.get("phase"))
            return controller
        if phase is QuizPhase.SELECTING:
            return controller

        questions = get_questions(data.get("category", ""), controller.bank)
        answers = data.get("answers")
        index = data.get("current_index")
        if (
            not questions
            or not isinstance(answers, list)
            or len(answers) != len(questions)
            or not isinstance(index, int)
            or not 0 <= index < len(questions)
        ):
            logger.warning("Discarding inconsistent quiz state")
            return controller

        controller.session = QuizSession(
            category=data["category"],
            questions=tuple(questions),
            current_index=index,
            answers=[a if _is_valid_choice(a, q) else None for a, q in zip(answers, questions)],
        )
        controller.phase = phase
        if data.get("last_record"):
            controller.last_record = ScoreRecord.from_dict(data["last_record"])
        return controller
