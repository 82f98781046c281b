"""Pure view builders: quiz state -> view description -> message text."""
from dataclasses import dataclass
from typing import Optional

from weblearn.config import CATEGORY_TITLES
from weblearn.quiz.scoring import ScoreRecord, per_question_correctness

OPTION_LABELS = ["A", "B", "C", "D"]


@dataclass(frozen=True)
class QuestionView:
    category: str
    index: int
    total: int
    prompt: str
    options: tuple[str, ...]
    selected: Optional[int]
    is_first: bool
    is_last: bool


@dataclass(frozen=True)
class ResultItem:
    prompt: str
    correct: bool
    correct_option_text: str
    explanation: str


@dataclass(frozen=True)
class ResultsView:
    category: str
    percentage: int
    correct_count: int
    total_count: int
    items: tuple[ResultItem, ...]


def render_question(session) -> QuestionView:
    q = session.current_question
    return QuestionView(
        category=session.category,
        index=session.current_index,
        total=session.total,
        prompt=q.prompt,
        options=q.options,
        selected=session.answers[session.current_index],
        is_first=session.is_first,
        is_last=session.is_last,
    )


def render_results(session, record: ScoreRecord) -> ResultsView:
    items = tuple(
        ResultItem(
            prompt=q.prompt,
            correct=correct,
            correct_option_text=q.correct_text,
            explanation=q.explanation,
        )
        for q, correct in zip(session.questions, per_question_correctness(session))
    )
    return ResultsView(
        category=record.category,
        percentage=record.percentage,
        correct_count=record.correct_count,
        total_count=record.total_count,
        items=items,
    )


def option_label(i: int) -> str:
    return OPTION_LABELS[i] if i < len(OPTION_LABELS) else str(i + 1)


def format_question(view: QuestionView) -> str:
    title = CATEGORY_TITLES.get(view.category, view.category)
    lines = [f"❓ {title} — question {view.index + 1} of {view.total}", "", view.prompt, ""]
    for i, option in enumerate(view.options):
        marker = "👉 " if view.selected == i else ""
        lines.append(f"{marker}{option_label(i)}) {option}")
    return "\n".join(lines)


def _score_comment(percent: int) -> tuple[str, str]:
    if percent >= 90:
        return "🏆", "Excellent result!"
    elif percent >= 70:
        return "👍", "Good result!"
    elif percent >= 50:
        return "📖", "Not bad, but there is room to improve."
    return "💪", "Keep practising. You can do it!"


def format_results(view: ResultsView) -> str:
    emoji, comment = _score_comment(view.percentage)
    title = CATEGORY_TITLES.get(view.category, view.category)
    lines = [
        "📊 Quiz complete!",
        "",
        f"📚 Category: {title}",
        f"{emoji} Correct: {view.correct_count} of {view.total_count} ({view.percentage}%)",
        "",
        comment,
        "",
    ]
    for n, item in enumerate(view.items, start=1):
        mark = "✅ Correct" if item.correct else "❌ Wrong"
        lines.append(f"Q{n}: {item.prompt}")
        lines.append(f"{mark}: {item.correct_option_text}")
        if item.explanation:
            lines.append(f"💡 {item.explanation}")
        lines.append("")
    return "\n".join(lines).rstrip()


def format_share(record: ScoreRecord) -> str:
    """Short score message meant to be forwarded."""
    emoji, _ = _score_comment(record.percentage)
    title = CATEGORY_TITLES.get(record.category, record.category)
    return (
        f"{emoji} I just finished the WebLearn {title} quiz: "
        f"{record.correct_count} of {record.total_count} correct ({record.percentage}%)!\n"
        "Try it yourself with /quiz."
    )
