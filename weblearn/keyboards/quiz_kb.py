from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from weblearn.config import CATEGORIES, CATEGORY_TITLES
from weblearn.quiz.render import QuestionView, option_label


def category_keyboard() -> InlineKeyboardMarkup:
    buttons = []
    for category in CATEGORIES:
        buttons.append([InlineKeyboardButton(
            text=CATEGORY_TITLES[category],
            callback_data=f"quiz:cat:{category}",
        )])
    buttons.append([InlineKeyboardButton(text="🏠 Back", callback_data="go_home")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def question_keyboard(view: QuestionView) -> InlineKeyboardMarkup:
    buttons = []
    for i, option in enumerate(view.options):
        marker = "✅ " if view.selected == i else ""
        buttons.append([InlineKeyboardButton(
            text=f"{marker}{option_label(i)}) {option}",
            callback_data=f"quiz:ans:{i}",
        )])

    nav = []
    if not view.is_first:
        nav.append(InlineKeyboardButton(text="⬅️ Previous", callback_data="quiz:prev"))
    next_text = "🏁 See results" if view.is_last else "Next ➡️"
    nav.append(InlineKeyboardButton(text=next_text, callback_data="quiz:next"))
    buttons.append(nav)
    buttons.append([InlineKeyboardButton(text="❌ Exit quiz", callback_data="quiz:exit")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def results_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="🔁 Try again", callback_data="quiz:retry")],
        [InlineKeyboardButton(text="📤 Share result", callback_data="quiz:share")],
        [InlineKeyboardButton(text="📚 Choose another quiz", callback_data="quiz:exit")],
        [InlineKeyboardButton(text="📈 My progress", callback_data="my_progress")],
    ])
