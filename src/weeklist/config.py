"""Configuration management for Weeklist."""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

WEEKLIST_HOME = Path(os.environ.get("WEEKLIST_HOME", Path.home() / ".weeklist"))
CONFIG_FILE = WEEKLIST_HOME / "weeklist.conf"


class ConfigError(ValueError):
    """Raised when required configuration is missing or invalid."""

    pass


class SaveFailurePolicy(str, Enum):
    """What the user is told when a mutation could not be persisted."""

    REPORT_SUCCESS = "report_success"
    WARN_USER = "warn_user"


@dataclass
class Config:
    """Weeklist configuration."""

    tele_token: str = ""
    chat_id: str = ""
    storage_backend: str = "jsonbin"
    jsonbin_url: str = ""
    jsonbin_key: str = ""
    jsonbin_timeout: float | None = None
    tasks_file: str = ""
    timezone: str = "Asia/Kolkata"
    reminder_time: str = "10:00"
    enable_scheduler: bool = True
    greeting_name: str = "Digi"
    save_failure_policy: SaveFailurePolicy = SaveFailurePolicy.REPORT_SUCCESS
    host: str = "0.0.0.0"
    port: int = 3000

    def missing(self) -> list[str]:
        """Names of required settings that are not set."""
        missing = []
        if not self.tele_token:
            missing.append("TELE_TOKEN")
        if not self.chat_id:
            missing.append("CHAT_ID")
        if self.storage_backend == "jsonbin":
            if not self.jsonbin_url:
                missing.append("JSONBIN_URL")
            if not self.jsonbin_key:
                missing.append("JSONBIN_KEY")
        elif self.storage_backend == "file":
            if not self.tasks_file:
                missing.append("TASKS_FILE")
        return missing

    def require_complete(self) -> None:
        """Raise ConfigError unless the server can start with this config."""
        if self.storage_backend not in ("jsonbin", "file"):
            raise ConfigError(
                f"Unknown STORAGE_BACKEND {self.storage_backend!r} (expected 'jsonbin' or 'file')"
            )
        missing = self.missing()
        if missing:
            raise ConfigError(f"Missing environment variables: {', '.join(missing)}")
        self.check_timezone()
        self.reminder_hour_minute()

    def check_timezone(self) -> None:
        """Raise ConfigError if TIMEZONE is not a known IANA zone."""
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ConfigError(f"Unknown TIMEZONE: {self.timezone!r}")

    def reminder_hour_minute(self) -> tuple[int, int]:
        """Parse REMINDER_TIME as (hour, minute)."""
        try:
            hour, minute = map(int, self.reminder_time.split(":"))
        except ValueError:
            raise ConfigError(f"Invalid REMINDER_TIME format: {self.reminder_time!r} (expected HH:MM)")
        if not (0 <= hour < 24 and 0 <= minute < 60):
            raise ConfigError(f"REMINDER_TIME out of range: {self.reminder_time!r}")
        return hour, minute


def _strip_value(value: str) -> str:
    """Handle quoted values with inline comments: "value" # comment"""
    value = value.strip()
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def read_config_file(path: Path) -> dict[str, str]:
    """Read KEY=value lines from a config file. Missing file yields {}."""
    values: dict[str, str] = {}
    if not path.exists():
        return values

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        values[key.strip().upper()] = _strip_value(value)

    return values


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(environ: dict[str, str] | None = None, config_file: Path | None = None) -> Config:
    """
    Build configuration from the config file, then the environment.

    Environment variables win over the file. Nothing is validated here; call
    Config.require_complete() before serving.
    """
    if environ is None:
        environ = dict(os.environ)
    values = read_config_file(config_file or CONFIG_FILE)
    values.update({k.upper(): v for k, v in environ.items()})

    config = Config()
    for key, value in values.items():
        match key:
            case "TELE_TOKEN":
                config.tele_token = value
            case "CHAT_ID":
                config.chat_id = value.strip()
            case "STORAGE_BACKEND":
                config.storage_backend = value.strip().lower()
            case "JSONBIN_URL":
                config.jsonbin_url = value.rstrip("/")
            case "JSONBIN_KEY":
                config.jsonbin_key = value
            case "JSONBIN_TIMEOUT":
                try:
                    config.jsonbin_timeout = float(value) if value else None
                except ValueError:
                    logger.warning(f"Ignoring invalid JSONBIN_TIMEOUT: {value}")
            case "TASKS_FILE":
                config.tasks_file = value
            case "TIMEZONE":
                config.timezone = value
            case "REMINDER_TIME":
                config.reminder_time = value
            case "ENABLE_SCHEDULER":
                config.enable_scheduler = _as_bool(value)
            case "GREETING_NAME":
                config.greeting_name = value
            case "SAVE_FAILURE_POLICY":
                try:
                    config.save_failure_policy = SaveFailurePolicy(value.strip().lower())
                except ValueError:
                    logger.warning(f"Unknown SAVE_FAILURE_POLICY {value!r}, using report_success")
            case "HOST":
                config.host = value
            case "PORT":
                try:
                    config.port = int(value)
                except ValueError:
                    logger.warning(f"Ignoring invalid PORT: {value}")

    return config
