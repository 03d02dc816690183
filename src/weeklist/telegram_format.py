"""Telegram message formatting utilities."""

import telegramify_markdown

CHUNK_SIZE = 4000


def to_telegram_chunks(text: str) -> list[str]:
    """Convert Markdown to MarkdownV2 and split into sendable chunks."""
    converted = telegramify_markdown.markdownify(text)
    return [converted[i : i + CHUNK_SIZE] for i in range(0, len(converted), CHUNK_SIZE)]


async def send_markdown(bot, text: str, *, chat_id: int | str):
    """Send markdown text to Telegram, converting to MarkdownV2."""
    for chunk in to_telegram_chunks(text):
        await bot.send_message(chat_id=chat_id, text=chunk, parse_mode="MarkdownV2")
