"""Task storage interface."""

from dataclasses import dataclass
from typing import Protocol

from weeklist.core.tasks import TaskDocument


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a save. Stores report failures here instead of raising."""

    ok: bool
    error: str | None = None


class TaskStore(Protocol):
    """Interface for loading and saving the task document from any backend."""

    def load(self) -> TaskDocument:
        """Fetch the current document. Returns an empty document on any failure."""
        ...

    def save(self, doc: TaskDocument) -> SaveResult:
        """Overwrite the stored document with doc."""
        ...
