import logging

from aiogram.exceptions import TelegramBadRequest
from aiogram.types import InlineKeyboardMarkup, Message

logger = logging.getLogger(__name__)


async def edit_or_answer(message: Message, text: str, reply_markup: InlineKeyboardMarkup | None = None):
    """Edit the bot's message in place; an unchanged message is not an error."""
    try:
        await message.edit_text(text, reply_markup=reply_markup)
    except TelegramBadRequest as e:
        if "message is not modified" in str(e):
            return
        logger.warning("Could not edit message, sending a new one: %s", e)
        await message.answer(text, reply_markup=reply_markup)
