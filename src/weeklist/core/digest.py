"""Daily digest selection and formatting - no I/O."""

from datetime import datetime
from zoneinfo import ZoneInfo

from .tasks import WEEKDAY, WEEKEND, TaskDocument, escape_markdown, format_list

DEFAULT_TIMEZONE = "Asia/Kolkata"


def list_for_day(moment: datetime | None = None, timezone: str = DEFAULT_TIMEZONE) -> str:
    """
    Pick today's list name.

    The weekday is taken in the given timezone, so 20:00 UTC on a Friday
    is already Saturday in Asia/Kolkata. Naive datetimes are treated as UTC.
    """
    tz = ZoneInfo(timezone)
    if moment is None:
        moment = datetime.now(tz)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=ZoneInfo("UTC")).astimezone(tz)
    else:
        moment = moment.astimezone(tz)
    # Saturday=5, Sunday=6
    return WEEKEND if moment.weekday() >= 5 else WEEKDAY


def compose_digest(doc: TaskDocument, list_name: str, greeting_name: str = "Digi") -> str:
    """Format the digest message for the given list."""
    items = doc.get(list_name)
    if not items:
        return f"No **{list_name}** tasks today! Enjoy your day."
    return f"Good morning, {escape_markdown(greeting_name)}!\nYour **{list_name}** tasks:\n\n{format_list(items)}"
