"""Weeklist CLI - weekday/weekend task list bot."""

import asyncio
import json
import logging
import sys

import click

from .adapters import TelegramMessenger, create_store
from .config import Config, ConfigError, load_config
from .router import CommandRouter
from .workflows import build_digest, send_daily_digest


def setup_logging(debug: bool = False) -> None:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )


def _require_config(*, need_telegram: bool = True) -> Config:
    """Load config or exit with a diagnostic."""
    config = load_config()
    try:
        if need_telegram:
            config.require_complete()
        else:
            missing = [m for m in config.missing() if m != "TELE_TOKEN"]
            if missing:
                raise ConfigError(f"Missing environment variables: {', '.join(missing)}")
            config.check_timezone()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    return config


@click.group()
@click.version_option()
def main():
    """Weeklist - weekday/weekend task list bot."""
    pass


@main.command()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def serve(debug: bool):
    """Run the webhook server (and the daily reminder)."""
    setup_logging(debug)
    config = _require_config()

    from .server import run_server

    try:
        run_server(config)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nServer stopped.")


@main.command()
@click.option("--dry-run", is_flag=True, help="Print the digest instead of sending it")
def digest(dry_run: bool):
    """Send today's list now."""
    setup_logging()
    config = _require_config(need_telegram=not dry_run)
    store = create_store(config)

    if dry_run:
        click.echo(build_digest(store, config.timezone, config.greeting_name))
        return

    messenger = TelegramMessenger.from_config(config)
    text = asyncio.run(
        send_daily_digest(store, messenger, timezone=config.timezone, greeting_name=config.greeting_name)
    )
    click.echo(text)


@main.command("run")
@click.argument("command_line", nargs=-1, required=True)
def run_command(command_line: tuple[str, ...]):
    """Run a bot command locally, e.g. `weeklist run /add weekday Buy milk`."""
    config = _require_config(need_telegram=False)
    router = CommandRouter(create_store(config), config.chat_id, config.save_failure_policy)
    response = router.handle(" ".join(command_line), config.chat_id)
    click.echo(response)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(as_json: bool):
    """Print both lists."""
    config = _require_config(need_telegram=False)
    doc = create_store(config).load()

    if as_json:
        click.echo(json.dumps(doc.to_dict(), indent=2, ensure_ascii=False))
        return

    for name in ("weekday", "weekend"):
        click.echo(f"{name.capitalize()}:")
        items = doc.get(name)
        if not items:
            click.echo("  (empty)")
        for i, item in enumerate(items, start=1):
            click.echo(f"  {i}. {item}")


@main.command("set-webhook")
@click.argument("url")
def set_webhook(url: str):
    """Point Telegram at this server's /webhook endpoint."""
    from telegram import Bot
    from telegram.error import TelegramError

    config = _require_config()
    if not url.rstrip("/").endswith("/webhook"):
        url = url.rstrip("/") + "/webhook"

    async def _set() -> bool:
        async with Bot(token=config.tele_token) as bot:
            return await bot.set_webhook(url=url, allowed_updates=["message"])

    try:
        ok = asyncio.run(_set())
    except TelegramError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not ok:
        click.echo("Telegram rejected the webhook.", err=True)
        sys.exit(1)
    click.echo(f"Webhook set to {url}")


if __name__ == "__main__":
    main()
