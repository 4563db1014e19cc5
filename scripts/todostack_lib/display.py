"""
Text rendering of todo items
"""

from datetime import datetime
from typing import List, Tuple

from .deadline import Deadline
from .models import TodoItem

DELIMITER = "=" * 60
DEADLINE_FORMAT = "%A, %B %d %Y %I:%M %p"


def format_deadline(deadline: Deadline) -> str:
    """Weekday, month, day, year and 12-hour time, the label, or a placeholder"""
    if deadline.kind == Deadline.TIMESTAMP:
        try:
            return datetime.fromtimestamp(deadline.value).strftime(DEADLINE_FORMAT)
        except (ValueError, OverflowError, OSError):
            # Outside the range datetime can represent
            return f"At timestamp {deadline.value}"
    if deadline.kind == Deadline.LABEL:
        return str(deadline.value)
    return "No particular deadline"


def render_item(item: TodoItem) -> str:
    lines = [
        DELIMITER,
        item.name,
        format_deadline(item.deadline),
        f"Tags: {', '.join(item.tags)}",
        "\n" + item.desc.rstrip("\n"),
        DELIMITER,
    ]
    return "\n".join(lines)


def render_listing(entries: List[Tuple[str, TodoItem]], mode: str = "full") -> str:
    """
    Render list output.

    Args:
        entries: (identifier, item) pairs in display order
        mode: "single" for bare identifiers, "tags" for identifiers with
            their tags, anything else for full items
    """
    if mode == "single":
        return "\n".join(identifier for identifier, _ in entries)
    if mode == "tags":
        return "\n".join(f"{identifier} {item.tags!r}" for identifier, item in entries)
    return "\n".join(render_item(item) for _, item in entries)
