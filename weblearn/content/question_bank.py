"""Static quiz content: categories -> ordered question lists."""
from dataclasses import dataclass
from typing import Optional

OPTION_COUNT = 4


@dataclass(frozen=True)
class Question:
    """Single multiple choice question."""
    prompt: str
    options: tuple[str, ...]
    correct_option: int
    explanation: str

    def __post_init__(self):
        if len(self.options) != OPTION_COUNT:
            raise ValueError(f"Question needs {OPTION_COUNT} options, got {len(self.options)}")
        if not 0 <= self.correct_option < OPTION_COUNT:
            raise ValueError(f"correct_option out of range: {self.correct_option}")

    @property
    def correct_text(self) -> str:
        return self.options[self.correct_option]


QUESTION_BANK: dict[str, tuple[Question, ...]] = {
    "html": (
        Question(
            prompt="Which tag sets the document title in the basic HTML structure?",
            options=("<title>", "<head>", "<header>", "<h1>"),
            correct_option=0,
            explanation="The <title> tag sets the title shown in the browser tab.",
        ),
        Question(
            prompt="Which HTML tag creates a link?",
            options=("<link>", "<a>", "<href>", "<url>"),
            correct_option=1,
            explanation="Links are made with the <a> tag and its href attribute.",
        ),
        Question(
            prompt="Which tag holds the content of an HTML document?",
            options=("<html>", "<head>", "<body>", "<main>"),
            correct_option=2,
            explanation="Everything shown to the user goes inside the <body> tag.",
        ),
    ),
    "css": (
        Question(
            prompt="Which CSS property sets the background colour of an element?",
            options=("color", "background-color", "bg-color", "background"),
            correct_option=1,
            explanation="background-color sets the background colour of an element.",
        ),
        Question(
            prompt="Which declaration centres text in CSS?",
            options=("text-align: middle", "text-align: center", "align: center", "center: true"),
            correct_option=1,
            explanation="text-align: center centres inline content.",
        ),
        Question(
            prompt="Which of these is NOT a way to hide an element in CSS?",
            options=("display: none", "visibility: hidden", "opacity: 0", "hidden: true"),
            correct_option=3,
            explanation="hidden: true is not a CSS property; hidden is an HTML attribute.",
        ),
    ),
    "javascript": (
        Question(
            prompt="Which of these is NOT a JavaScript variable declaration keyword?",
            options=("var", "let", "const", "variable"),
            correct_option=3,
            explanation="variable is not a keyword. JavaScript uses var, let and const.",
        ),
        Question(
            prompt="Which of these is NOT a way to define a function in JavaScript?",
            options=(
                "function name() {}",
                "const name = () => {}",
                "let name = function() {}",
                "def name() {}",
            ),
            correct_option=3,
            explanation="def is Python's keyword. JavaScript uses function or arrow syntax.",
        ),
        Question(
            prompt="Which DOM method selects an element by its ID?",
            options=("getElementById", "querySelector", "getElement", "selectById"),
            correct_option=0,
            explanation="document.getElementById() returns the element with that ID.",
        ),
    ),
}


def get_questions(category: str, bank=None) -> Optional[tuple[Question, ...]]:
    """Return the question list for a category, or None if it is not in the bank."""
    questions = (QUESTION_BANK if bank is None else bank).get(category)
    if not questions:
        return None
    return questions
