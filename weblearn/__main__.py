"""Main entry point for the WebLearn bot: python -m weblearn"""
import asyncio
import logging
import sys
from pathlib import Path

from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import BotCommand

from weblearn.config import settings
from weblearn.handlers import assistant, bookmarks, notes, playground, progress, quiz, search, start
from weblearn.middleware.store import StoreMiddleware
from weblearn.storage.backends import SqliteBackend
from weblearn.storage.database import Database
from weblearn.storage.store import StoreRegistry

logger = logging.getLogger(__name__)

BOT_COMMANDS = [
    BotCommand(command="start", description="Main menu"),
    BotCommand(command="quiz", description="Take a quiz"),
    BotCommand(command="progress", description="My progress"),
    BotCommand(command="ask", description="Ask the assistant"),
    BotCommand(command="search", description="Search tutorials"),
    BotCommand(command="playground", description="Code playground"),
    BotCommand(command="example", description="Open a starter example"),
    BotCommand(command="load", description="Run my saved code"),
    BotCommand(command="bookmarks", description="My bookmarks"),
    BotCommand(command="notes", description="My notes"),
    BotCommand(command="help", description="All commands"),
]


def setup_logging():
    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        Path(settings.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.LOG_FILE, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


def build_dispatcher(registry: StoreRegistry) -> Dispatcher:
    dp = Dispatcher(storage=MemoryStorage())

    dp.message.outer_middleware(StoreMiddleware(registry))
    dp.callback_query.outer_middleware(StoreMiddleware(registry))

    # start first so /start always resets
    dp.include_router(start.router)
    dp.include_router(quiz.router)
    dp.include_router(progress.router)
    dp.include_router(search.router)
    dp.include_router(bookmarks.router)
    dp.include_router(notes.router)
    dp.include_router(playground.router)
    dp.include_router(assistant.router)
    return dp


async def main():
    """Main function to start the bot."""
    setup_logging()

    if not settings.BOT_TOKEN:
        logger.error("BOT_TOKEN is not set. Create a .env file with BOT_TOKEN=...")
        sys.exit(1)

    logger.info("Starting WebLearn bot...")

    logger.info(f"Initializing database at {settings.DATABASE_PATH}")
    db = Database(settings.DATABASE_PATH)
    await db.connect()

    bot = Bot(token=settings.BOT_TOKEN)
    dp = build_dispatcher(StoreRegistry(SqliteBackend(db)))
    await bot.set_my_commands(BOT_COMMANDS)

    logger.info("Bot handlers registered successfully")

    try:
        logger.info("Starting bot polling...")
        await dp.start_polling(
            bot,
            allowed_updates=dp.resolve_used_update_types()
        )
    except Exception as e:
        logger.error(f"Error during polling: {e}")
        raise
    finally:
        await bot.session.close()
        await db.close()
        logger.info("Bot stopped")


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")


if __name__ == "__main__":
    run()
