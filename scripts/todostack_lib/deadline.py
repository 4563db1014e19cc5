"""
Deadline translation for todo items

Relative time expressions such as "3d", "+2w" or "1y" are turned into a
number of seconds. The calendar is deliberately naive: a month is 30 days
and a year is 12 months.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

DAY = 86400
WEEK = 7 * DAY
MONTH = 30 * DAY
YEAR = 12 * MONTH

UNIT_SECONDS = {
    'd': DAY,
    'w': WEEK,
    'm': MONTH,
    'y': YEAR,
}

_DURATION_RE = re.compile(r'^\s*\+?(\d+)(\S?)')


def translate(text: Optional[str]) -> Optional[int]:
    """
    Translate a relative time expression into seconds.

    Unknown unit characters (or no unit at all) count as seconds.

    Args:
        text: Expression like "3d" or "+2w"

    Returns:
        Duration in seconds, or None if the text has no leading integer
    """
    if not text:
        return None

    match = _DURATION_RE.match(text)
    if not match:
        return None

    amount = int(match.group(1))
    unit = match.group(2).lower()
    return amount * UNIT_SECONDS.get(unit, 1)


def is_before(a: Optional[float], b: Optional[float]) -> bool:
    """a < b, treating None on either side as incomparable (False)"""
    if a is None or b is None:
        return False
    return a < b


@dataclass(frozen=True)
class Deadline:
    """
    When an item is due.

    Exactly one of three kinds:
        absent    - no particular deadline
        timestamp - seconds since the Unix epoch
        label     - free text displayed verbatim
    """
    kind: str
    value: Union[float, str, None] = None

    ABSENT = "absent"
    TIMESTAMP = "timestamp"
    LABEL = "label"

    @classmethod
    def absent(cls) -> 'Deadline':
        return cls(cls.ABSENT)

    @classmethod
    def at(cls, seconds: float) -> 'Deadline':
        return cls(cls.TIMESTAMP, seconds)

    @classmethod
    def label(cls, text: str) -> 'Deadline':
        return cls(cls.LABEL, text)

    @property
    def is_absent(self) -> bool:
        return self.kind == self.ABSENT

    @property
    def timestamp(self) -> Optional[float]:
        """Timestamp value, or None for absent and label deadlines"""
        if self.kind == self.TIMESTAMP:
            return self.value
        return None

    def to_json(self) -> Union[float, str, None]:
        """null, number or string, by kind"""
        if self.kind == self.ABSENT:
            return None
        return self.value

    @classmethod
    def from_json(cls, data: Union[float, str, None]) -> 'Deadline':
        if data is None:
            return cls.absent()
        # bool is an int subclass but never a valid timestamp
        if isinstance(data, (int, float)) and not isinstance(data, bool):
            return cls.at(data)
        return cls.label(str(data))
