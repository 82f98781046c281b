from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton


def bookmarks_keyboard(bookmarks: list[dict]) -> InlineKeyboardMarkup:
    buttons = []
    for i, b in enumerate(bookmarks):
        title = b.get("title") or b["url"]
        buttons.append([InlineKeyboardButton(text=f"🗑 {title[:40]}", callback_data=f"bm:del:{i}")])
    buttons.append([InlineKeyboardButton(text="🏠 Main menu", callback_data="go_home")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def notes_keyboard(notes: list[dict]) -> InlineKeyboardMarkup:
    buttons = []
    for n in notes:
        buttons.append([InlineKeyboardButton(
            text=f"🗑 #{n['id']} {n['text'][:30]}",
            callback_data=f"note:del:{n['id']}",
        )])
    buttons.append([InlineKeyboardButton(text="🏠 Main menu", callback_data="go_home")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def playground_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [
            InlineKeyboardButton(text="📄 Basic example", callback_data="pg:example:basic"),
            InlineKeyboardButton(text="🎨 CSS example", callback_data="pg:example:css-styling"),
        ],
        [InlineKeyboardButton(text="📂 Load saved code", callback_data="pg:load")],
        [InlineKeyboardButton(text="🌓 Toggle theme", callback_data="pg:theme")],
        [InlineKeyboardButton(text="🏠 Main menu", callback_data="go_home")],
    ])
