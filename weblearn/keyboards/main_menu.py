from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton


def main_menu_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="📝 Take a quiz", callback_data="start_quiz")],
        [InlineKeyboardButton(text="📈 My progress", callback_data="my_progress")],
        [InlineKeyboardButton(text="🤖 Ask the assistant", callback_data="ask")],
        [InlineKeyboardButton(text="💻 Code playground", callback_data="playground")],
    ])


def home_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="🏠 Main menu", callback_data="go_home")],
    ])
