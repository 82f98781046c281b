import logging
from typing import Any, Awaitable, Callable

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from weblearn.storage.store import StoreRegistry

logger = logging.getLogger(__name__)


class StoreMiddleware(BaseMiddleware):
    """Puts the sender's ProgressStore into handler data as ``store``."""

    def __init__(self, registry: StoreRegistry):
        self.registry = registry

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        user = getattr(event, "from_user", None)
        if user is None:
            logger.debug("Dropping %s without a sender", type(event).__name__)
            return None

        data["store"] = self.registry.for_owner(user.id)
        return await handler(event, data)
