"""Command parsing - turns a chat line into a structured command.

Parsing is pure: no storage access and no knowledge of list contents. Range
checks against the current document happen in the router, after load.
"""

from dataclasses import dataclass

from .tasks import normalize_list_name

ADD_USAGE = "Usage: `/add <weekday|weekend> <task>`"
VIEW_USAGE = "Usage: `/view <weekday|weekend>`"
EDIT_USAGE = "Usage: `/edit <weekday|weekend> <index> <new text>`"
REMOVE_USAGE = "Usage: `/remove <weekday|weekend> <index>`"


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class ShowLists:
    pass


@dataclass(frozen=True)
class View:
    list_name: str


@dataclass(frozen=True)
class Add:
    list_name: str
    task: str


@dataclass(frozen=True)
class Edit:
    list_name: str
    index: int
    text: str


@dataclass(frozen=True)
class Remove:
    list_name: str
    index: int


@dataclass(frozen=True)
class Unknown:
    name: str


@dataclass(frozen=True)
class UsageError:
    usage: str


ParsedCommand = Help | ShowLists | View | Add | Edit | Remove | Unknown | UsageError


def tokenize(line: str) -> tuple[str, list[str]]:
    """
    Split a command line on whitespace.

    Returns (command, args). The command is lower-cased and any Telegram
    "@botname" suffix is dropped, so "/Add@my_bot" becomes "/add".
    """
    parts = line.split()
    if not parts:
        return "", []
    command = parts[0].lower().split("@", 1)[0]
    return command, parts[1:]


def parse_index(token: str | None) -> int | None:
    """Parse a 1-based position. Only plain ASCII digits count, so "+1" and "1_0" do not."""
    if token is None or not (token.isascii() and token.isdecimal()):
        return None
    index = int(token)
    return index if index >= 1 else None


def parse_command(line: str) -> ParsedCommand:
    """Parse a raw chat line into a command variant."""
    command, args = tokenize(line)
    list_name = normalize_list_name(args[0]) if args else None

    match command:
        case "/help" | "/start":
            return Help()
        case "/lists":
            return ShowLists()
        case "/view":
            if list_name is None:
                return UsageError(VIEW_USAGE)
            return View(list_name)
        case "/add":
            task = " ".join(args[1:]).strip()
            if list_name is None or not task:
                return UsageError(ADD_USAGE)
            return Add(list_name, task)
        case "/edit":
            index = parse_index(args[1] if len(args) > 1 else None)
            text = " ".join(args[2:]).strip()
            if list_name is None or index is None or not text:
                return UsageError(EDIT_USAGE)
            return Edit(list_name, index, text)
        case "/remove":
            index = parse_index(args[1] if len(args) > 1 else None)
            if list_name is None or index is None:
                return UsageError(REMOVE_USAGE)
            return Remove(list_name, index)
        case _:
            return Unknown(command)
