"""Telegram adapter - sends messages to the configured chat."""

import logging

from telegram import Bot
from telegram.error import TelegramError

from weeklist.config import Config
from weeklist.telegram_format import send_markdown

logger = logging.getLogger(__name__)


class TelegramMessenger:
    """
    Telegram Bot API adapter.

    Implements Messenger protocol. Delivery failures are logged and reported
    through the return value; nothing is retried.
    """

    def __init__(self, bot: Bot, chat_id: int | str):
        self.bot = bot
        self.chat_id = chat_id

    @classmethod
    def from_config(cls, config: Config) -> "TelegramMessenger":
        return cls(Bot(token=config.tele_token), config.chat_id)

    async def send(self, text: str) -> bool:
        try:
            await send_markdown(self.bot, text, chat_id=self.chat_id)
        except TelegramError as e:
            logger.error(f"Telegram send error: {e}")
            return False
        return True
