"""Weeklist webhook server and daily scheduler."""

import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool
from telegram import Update

from .adapters import TelegramMessenger, create_store
from .config import Config
from .ports.messenger import Messenger
from .ports.task_store import TaskStore
from .router import CommandRouter
from .workflows import send_daily_digest

logger = logging.getLogger(__name__)


def setup_scheduler(config: Config, store: TaskStore, messenger: Messenger) -> AsyncIOScheduler:
    """Set up the daily digest job at REMINDER_TIME in the configured timezone."""
    scheduler = AsyncIOScheduler(timezone=config.timezone)
    hour, minute = config.reminder_hour_minute()
    scheduler.add_job(
        send_daily_digest,
        CronTrigger(hour=hour, minute=minute, timezone=config.timezone),
        args=[store, messenger],
        kwargs={"timezone": config.timezone, "greeting_name": config.greeting_name},
        id="daily_digest",
    )
    logger.info(f"Scheduled daily digest at {hour:02d}:{minute:02d} {config.timezone}")
    return scheduler


def extract_command(payload: dict) -> tuple[str, int] | None:
    """Pull (text, sender id) out of a Telegram update, or None if it has no text."""
    if not isinstance(payload, dict) or not payload.get("message"):
        return None
    try:
        update = Update.de_json(payload, None)
    except (TypeError, ValueError, KeyError, AttributeError) as e:
        logger.warning(f"Ignoring malformed update: {e}")
        return None
    message = update.message if update else None
    if message is None or not message.text:
        return None
    sender = message.from_user.id if message.from_user else None
    return message.text, sender


def create_app(
    config: Config,
    store: TaskStore | None = None,
    messenger: Messenger | None = None,
) -> FastAPI:
    """Create the FastAPI application. store and messenger default to the configured backends."""
    if store is None:
        store = create_store(config)
    if messenger is None:
        messenger = TelegramMessenger.from_config(config)

    router = CommandRouter(store, config.chat_id, config.save_failure_policy)
    scheduler = setup_scheduler(config, store, messenger) if config.enable_scheduler else None

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if scheduler is not None:
            scheduler.start()
            logger.info("Scheduler started")
        yield
        if scheduler is not None:
            scheduler.shutdown(wait=False)

    app = FastAPI(lifespan=lifespan)
    app.state.router = router
    app.state.store = store
    app.state.messenger = messenger
    app.state.scheduler = scheduler

    @app.get("/", response_class=PlainTextResponse)
    async def daily_digest():
        """Send today's list now."""
        await send_daily_digest(
            store, messenger, timezone=config.timezone, greeting_name=config.greeting_name
        )
        return "Daily list sent to Telegram."

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.post("/webhook", response_class=PlainTextResponse)
    async def webhook(request: Request):
        try:
            payload = await request.json()
            logger.debug(f"Incoming update: {payload}")
            command = extract_command(payload)
            if command is not None:
                text, sender = command
                response = await run_in_threadpool(router.handle, text, sender)
                if response:
                    await messenger.send(response)
        except Exception as e:
            logger.exception(f"Webhook error: {e}")
            return PlainTextResponse("error", status_code=500)
        return "ok"

    return app


def run_server(config: Config) -> None:
    """Run the webhook server until interrupted."""
    import uvicorn

    app = create_app(config)
    logger.info(f"Bot authorized for chat {config.chat_id}; storage backend: {config.storage_backend}")
    logger.info(f"Server running on port {config.port}")
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)
