"""Ports - interfaces/protocols for external dependencies."""

from .task_store import TaskStore, SaveResult
from .messenger import Messenger

__all__ = [
    "TaskStore",
    "SaveResult",
    "Messenger",
]
