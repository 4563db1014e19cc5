"""
Listing and deadline filtering for the todo stack
"""

import time
import logging
from typing import Optional, List, Tuple

from .deadline import translate, is_before
from .models import TodoItem
from .storage import Storage

logger = logging.getLogger(__name__)

TIMELESS = "timeless"


def list_items(storage: Storage, deadline_filter: Optional[str] = None,
               now: Optional[float] = None) -> List[Tuple[str, TodoItem]]:
    """
    Items to display, oldest pushed first.

    Identifiers whose record is missing are skipped.

    Args:
        storage: Storage to read from
        deadline_filter: "timeless" for items without a deadline, or a
            duration expression such as "3d" for items due within it
        now: Reference time (default: time.time())

    Returns:
        List of (identifier, item) pairs
    """
    if now is None:
        now = time.time()

    with storage.lock():
        identifiers = list(reversed(storage.load_stack()))
        entries = []
        for identifier in identifiers:
            item = storage.load_item(identifier)
            if item is None:
                logger.debug(f"Skipping {identifier!r}: no item record")
                continue
            entries.append((identifier, item))

    if not deadline_filter:
        return entries

    if deadline_filter == TIMELESS:
        return [(identifier, item) for identifier, item in entries if item.deadline.is_absent]

    window = translate(deadline_filter)
    if window is None:
        logger.warning(f"Deadline filter {deadline_filter!r} is not a duration, nothing matches")

    return [
        (identifier, item) for identifier, item in entries
        if item.deadline.timestamp is not None
        and is_before(item.deadline.timestamp - now, window)
    ]
