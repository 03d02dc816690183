"""Functional core - pure business logic with no I/O."""

from .tasks import (
    LIST_NAMES,
    WEEKDAY,
    WEEKEND,
    EMPTY_PLACEHOLDER,
    TaskDocument,
    escape_markdown,
    format_list,
    format_both_lists,
    normalize_list_name,
)
from .commands import ParsedCommand, parse_command, tokenize, parse_index
from .digest import list_for_day, compose_digest

__all__ = [
    # Tasks
    "LIST_NAMES",
    "WEEKDAY",
    "WEEKEND",
    "EMPTY_PLACEHOLDER",
    "TaskDocument",
    "escape_markdown",
    "format_list",
    "format_both_lists",
    "normalize_list_name",
    # Commands
    "ParsedCommand",
    "parse_command",
    "tokenize",
    "parse_index",
    # Digest
    "list_for_day",
    "compose_digest",
]
