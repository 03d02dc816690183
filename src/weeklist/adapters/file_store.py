"""File-based task storage adapter."""

import json
import logging
from pathlib import Path

from weeklist.core.tasks import TaskDocument
from weeklist.ports.task_store import SaveResult

logger = logging.getLogger(__name__)


class FileTaskStore:
    """
    Local JSON file storage.

    Implements TaskStore protocol. The whole document lives in one file.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def load(self) -> TaskDocument:
        """Read the document. Missing or unreadable file yields an empty one."""
        if not self.path.exists():
            return TaskDocument()
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read {self.path}: {e}")
            return TaskDocument()
        return TaskDocument.from_dict(data)

    def save(self, doc: TaskDocument) -> SaveResult:
        """Overwrite the file with the full document."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(doc.to_dict(), indent=2, ensure_ascii=False))
        except OSError as e:
            logger.error(f"Failed to save {self.path}: {e}")
            return SaveResult(ok=False, error=str(e))

        logger.info(f"Data saved to {self.path}.")
        return SaveResult(ok=True)
