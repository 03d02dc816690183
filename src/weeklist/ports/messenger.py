"""Outbound message interface."""

from typing import Protocol


class Messenger(Protocol):
    """Interface for delivering a message to the configured recipient."""

    async def send(self, text: str) -> bool:
        """Send Markdown text. Returns False if delivery failed."""
        ...
