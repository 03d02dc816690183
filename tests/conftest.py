"""Shared pytest fixtures: in-memory fakes for the storage and message ports."""

import pytest

from weeklist.config import Config
from weeklist.core.tasks import TaskDocument
from weeklist.ports.task_store import SaveResult

OWNER_ID = 4242


class InMemoryStore:
    """TaskStore fake that keeps a JSON-like snapshot and counts calls."""

    def __init__(self, data: dict | None = None, fail_saves: bool = False):
        self.data = data if data is not None else {"weekday": [], "weekend": []}
        self.fail_saves = fail_saves
        self.loads = 0
        self.saves = 0

    def load(self) -> TaskDocument:
        self.loads += 1
        return TaskDocument.from_dict(self.data)

    def save(self, doc: TaskDocument) -> SaveResult:
        self.saves += 1
        if self.fail_saves:
            return SaveResult(ok=False, error="boom")
        self.data = doc.to_dict()
        return SaveResult(ok=True)


class RecordingMessenger:
    """Messenger fake that remembers what it was asked to send."""

    def __init__(self, ok: bool = True):
        self.ok = ok
        self.sent: list[str] = []

    async def send(self, text: str) -> bool:
        self.sent.append(text)
        return self.ok


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def messenger():
    return RecordingMessenger()


@pytest.fixture
def config():
    return Config(
        tele_token="123:abc",
        chat_id=str(OWNER_ID),
        jsonbin_url="https://api.jsonbin.io/v3/b/abc",
        jsonbin_key="secret",
        enable_scheduler=False,
    )
