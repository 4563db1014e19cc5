"""
Data models for the todo stack
"""

import ast
import re
import time
from datetime import datetime
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

from .deadline import Deadline, translate
from .errors import ParseError

# Characters that mark the tags segment as a literal expression
_LITERAL_OPENERS = ('[', '(', '{', "'", '"')
_BARE_TAG_SPLIT = re.compile(r'[,\s]+')


def make_identifier(name: str) -> str:
    """Case-folded name used as stack entry and record file name"""
    return name.strip().casefold()


@dataclass
class TodoItem:
    """Represents one task on the stack"""
    name: str
    deadline: Deadline = field(default_factory=Deadline.absent)
    tags: List[str] = field(default_factory=list)
    desc: str = ""

    @property
    def identifier(self) -> str:
        return make_identifier(self.name)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the item record file"""
        return {
            "name": self.name,
            "deadline": self.deadline.to_json(),
            "tags": list(self.tags),
            "desc": self.desc,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'TodoItem':
        """Create TodoItem from a parsed record file"""
        if not isinstance(data, dict) or not data.get('name'):
            raise ParseError(f"Not a todo item record: {data!r}")

        return cls(
            name=data['name'],
            deadline=Deadline.from_json(data.get('deadline')),
            tags=[str(tag) for tag in data.get('tags') or []],
            desc=data.get('desc') or ""
        )


def parse_deadline(text: str, now: float) -> Deadline:
    """
    Turn the deadline segment into a Deadline.

    Durations become timestamps relative to now, anything else that is not
    blank is kept as a label. A quoted string literal is unquoted.
    """
    text = text.strip()
    if not text:
        return Deadline.absent()

    duration = translate(text)
    if duration is not None:
        try:
            timestamp = now + duration
            datetime.fromtimestamp(timestamp)
        except (ValueError, OverflowError, OSError) as e:
            raise ParseError(f"Deadline {text!r} is too far away: {e}") from e
        return Deadline.at(timestamp)

    if text[0] in ("'", '"'):
        try:
            value = ast.literal_eval(text)
        except (ValueError, SyntaxError):
            value = None
        if isinstance(value, str):
            return Deadline.label(value)

    return Deadline.label(text)


def _tag_label(node: ast.AST) -> str:
    """Bare names and string or number constants are labels"""
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Constant):
        value = node.value
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return str(value)
    raise ParseError(f"Tag {ast.dump(node)} is not a label")


def parse_tags(text: str) -> List[str]:
    """
    Parse the tags segment.

    Literal expressions ([...], (...), {...} or a quoted string) must hold
    labels: bare names, strings or numbers, e.g. [work, "q3", 2024].
    Anything else is read as bare labels separated by commas or whitespace.

    Raises:
        ParseError: Literal expression is malformed or not a list of labels
    """
    text = text.strip()
    if not text:
        return []

    if text.startswith(_LITERAL_OPENERS):
        try:
            node = ast.parse(text, mode='eval').body
        except (SyntaxError, ValueError) as e:
            raise ParseError(f"Malformed tag list {text!r}: {e}") from e

        if isinstance(node, (ast.List, ast.Tuple, ast.Set)):
            elements = node.elts
        elif isinstance(node, ast.Constant) and isinstance(node.value, str):
            elements = [node]
        else:
            raise ParseError(f"Tags must be a list of labels, got {text!r}")

        labels = [_tag_label(element) for element in elements]
    else:
        labels = [label for label in _BARE_TAG_SPLIT.split(text) if label]

    # Drop duplicates, keep first occurrence
    return list(dict.fromkeys(labels))


def parse_item(raw_text: str, now: Optional[float] = None) -> TodoItem:
    """
    Build a TodoItem from raw four-part input.

    The segments are separated by the first three line breaks:
    name, deadline expression, tags, description. The description keeps
    any further line breaks verbatim.

    Args:
        raw_text: Raw item text
        now: Reference time for relative deadlines (default: time.time())

    Returns:
        Parsed TodoItem

    Raises:
        ParseError: Empty name or malformed tags segment
    """
    if now is None:
        now = time.time()

    segments = raw_text.split('\n', 3)
    segments += [''] * (4 - len(segments))
    name, deadline_text, tags_text, desc = segments

    name = name.strip()
    if not name:
        raise ParseError("Item name cannot be empty")

    return TodoItem(
        name=name,
        deadline=parse_deadline(deadline_text, now),
        tags=parse_tags(tags_text),
        desc=desc
    )
