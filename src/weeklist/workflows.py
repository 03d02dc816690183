"""Shared workflow layer between the webhook server, the scheduler and the CLI."""

import asyncio
import logging
from datetime import datetime

from .core.digest import DEFAULT_TIMEZONE, compose_digest, list_for_day
from .ports.messenger import Messenger
from .ports.task_store import TaskStore

logger = logging.getLogger(__name__)


def build_digest(
    store: TaskStore,
    timezone: str = DEFAULT_TIMEZONE,
    greeting_name: str = "Digi",
    now: datetime | None = None,
) -> str:
    """Load the document and format today's list. Read-only."""
    doc = store.load()
    list_name = list_for_day(now, timezone)
    return compose_digest(doc, list_name, greeting_name)


async def send_daily_digest(
    store: TaskStore,
    messenger: Messenger,
    timezone: str = DEFAULT_TIMEZONE,
    greeting_name: str = "Digi",
    now: datetime | None = None,
) -> str:
    """Build today's digest, send it, and return the text that was sent."""
    text = await asyncio.to_thread(build_digest, store, timezone, greeting_name, now)
    if not await messenger.send(text):
        logger.error("Daily digest could not be delivered")
    return text
