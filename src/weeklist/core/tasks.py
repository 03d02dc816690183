"""Pure task list domain logic - no I/O dependencies."""

from dataclasses import dataclass, field

WEEKDAY = "weekday"
WEEKEND = "weekend"
LIST_NAMES = (WEEKDAY, WEEKEND)

EMPTY_PLACEHOLDER = "_(empty)_"

# CommonMark treats a backslash before any of these as a literal character.
MARKDOWN_SPECIAL = set("\\`*_{}[]()<>#+-.!|~=")


@dataclass
class TaskDocument:
    """The persisted pair of task lists."""

    weekday: list[str] = field(default_factory=list)
    weekend: list[str] = field(default_factory=list)

    def get(self, list_name: str) -> list[str]:
        """Return the named list (the live list, not a copy)."""
        if list_name not in LIST_NAMES:
            raise KeyError(list_name)
        return getattr(self, list_name)

    def to_dict(self) -> dict:
        return {WEEKDAY: list(self.weekday), WEEKEND: list(self.weekend)}

    @classmethod
    def from_dict(cls, data) -> "TaskDocument":
        """
        Build a document from decoded JSON.

        Anything that is not an object yields an empty document; a field that
        is missing or not a list is replaced by an empty list.
        """
        if not isinstance(data, dict):
            return cls()
        return cls(
            weekday=_coerce_list(data.get(WEEKDAY)),
            weekend=_coerce_list(data.get(WEEKEND)),
        )


def _coerce_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value]


def normalize_list_name(name: str | None) -> str | None:
    """Return the canonical list name, or None if it is not a known list."""
    if not name:
        return None
    name = name.lower()
    return name if name in LIST_NAMES else None


def escape_markdown(text: str) -> str:
    """Backslash-escape Markdown syntax so user text is shown as typed."""
    return "".join(f"\\{ch}" if ch in MARKDOWN_SPECIAL else ch for ch in text)


def format_list(items: list[str]) -> str:
    """
    Render a list as numbered lines.

    Items are user text and are escaped; the numbering is markup.

    Pure function - no I/O.
    """
    if not items:
        return EMPTY_PLACEHOLDER
    return "\n".join(f"{i}. {escape_markdown(item)}" for i, item in enumerate(items, start=1))


def format_both_lists(doc: TaskDocument) -> str:
    return f"**Weekday:**\n{format_list(doc.weekday)}\n\n**Weekend:**\n{format_list(doc.weekend)}"
