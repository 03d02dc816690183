"""Adapters - I/O implementations of ports."""

from weeklist.config import Config, ConfigError

from .jsonbin import JsonBinStore
from .file_store import FileTaskStore
from .telegram_messenger import TelegramMessenger

__all__ = [
    "JsonBinStore",
    "FileTaskStore",
    "TelegramMessenger",
    "create_store",
]


def create_store(config: Config) -> JsonBinStore | FileTaskStore:
    """Build the storage backend selected by STORAGE_BACKEND."""
    match config.storage_backend:
        case "jsonbin":
            return JsonBinStore.from_config(config)
        case "file":
            return FileTaskStore(config.tasks_file)
        case other:
            raise ConfigError(f"Unknown STORAGE_BACKEND {other!r}")
