"""Command router - authorizes, parses, applies and answers chat commands."""

import logging

from .config import SaveFailurePolicy
from .core.commands import (
    Add,
    Edit,
    Help,
    Remove,
    ShowLists,
    Unknown,
    UsageError,
    View,
    parse_command,
)
from .core.tasks import TaskDocument, escape_markdown, format_both_lists, format_list
from .ports.task_store import SaveResult, TaskStore

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "**To-Do Bot Commands**\n\n"
    "`/add <weekday|weekend> <task>`\n"
    "`/view <weekday|weekend>`\n"
    "`/edit <weekday|weekend> <index> <new task>`\n"
    "`/remove <weekday|weekend> <index>`\n"
    "`/lists` - view both lists\n"
)
UNKNOWN_TEXT = "Unknown command. Use /help for usage."
OUT_OF_RANGE_TEXT = "Index out of range."
SAVE_WARNING = "Warning: the change could not be saved and may be lost."


class CommandRouter:
    """
    Turns one chat line from one sender into one response.

    Every accepted command loads the document once; commands that change it
    save once afterwards. Load and save are not guarded, so two overlapping
    mutations race and the later save wins.
    """

    def __init__(
        self,
        store: TaskStore,
        authorized_id: int | str,
        save_failure_policy: SaveFailurePolicy = SaveFailurePolicy.REPORT_SUCCESS,
    ):
        self.store = store
        self.authorized_id = str(authorized_id)
        self.save_failure_policy = save_failure_policy

    def is_authorized(self, sender_id) -> bool:
        return str(sender_id) == self.authorized_id

    def handle(self, command_line: str, sender_id) -> str | None:
        """Handle a command. Returns None for unauthorized senders."""
        if not self.is_authorized(sender_id):
            return None

        command = parse_command(command_line)
        doc = self.store.load()
        response, changed = self._apply(command, doc)

        if changed:
            result = self.store.save(doc)
            response = self._with_save_outcome(response, result)
        return response

    def _apply(self, command, doc: TaskDocument) -> tuple[str, bool]:
        """Run command against doc in place. Returns (response, changed)."""
        match command:
            case Help():
                return HELP_TEXT, False
            case ShowLists():
                return format_both_lists(doc), False
            case View(list_name):
                return f"**{list_name}**\n{format_list(doc.get(list_name))}", False
            case Add(list_name, task):
                doc.get(list_name).append(task)
                return f"Added to **{list_name}**: {escape_markdown(task)}", True
            case Edit(list_name, index, text):
                items = doc.get(list_name)
                if index > len(items):
                    return OUT_OF_RANGE_TEXT, False
                old = items[index - 1]
                items[index - 1] = text
                return f'Edited **{list_name}** {index}: "{escape_markdown(old)}" → "{escape_markdown(text)}"', True
            case Remove(list_name, index):
                items = doc.get(list_name)
                if index > len(items):
                    return OUT_OF_RANGE_TEXT, False
                removed = items.pop(index - 1)
                return f"Removed from **{list_name}**: {escape_markdown(removed)}", True
            case UsageError(usage):
                return usage, False
            case Unknown():
                return UNKNOWN_TEXT, False
        raise TypeError(f"Unhandled command: {command!r}")

    def _with_save_outcome(self, response: str, result: SaveResult) -> str:
        if result.ok:
            return response
        logger.warning(f"Reporting change despite failed save: {result.error}")
        if self.save_failure_policy is SaveFailurePolicy.WARN_USER:
            return f"{response}\n\n_{SAVE_WARNING}_"
        return response
