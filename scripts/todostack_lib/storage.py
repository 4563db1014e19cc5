"""
On-disk storage for the todo stack

Layout under the root directory:
    list          - JSON list of identifiers, newest first
    <identifier>  - one JSON record per item
    .lock         - advisory lock file for read-modify-write cycles
"""

import json
import os
import sys
import logging
import tempfile
from contextlib import contextmanager
from typing import Optional, List, Iterator

from .config_manager import StackConfig
from .errors import NotFoundError, ParseError
from .models import TodoItem, make_identifier

# Platform-specific imports for file locking
if sys.platform == 'win32':
    import msvcrt  # Windows file locking
else:
    import fcntl  # Unix file locking

logger = logging.getLogger(__name__)


class Storage:
    """Reads and writes the stack file and item records under one root"""

    def __init__(self, config: StackConfig):
        self.config = config

    def check_identifier(self, identifier: str) -> str:
        """
        Case-fold an identifier and make sure it maps to a plain file
        inside the root.

        Raises:
            ParseError: Identifier is empty, hidden, reserved or contains a path separator
        """
        identifier = make_identifier(identifier or "")
        if not identifier:
            raise ParseError("Identifier cannot be empty")
        if identifier.startswith('.'):
            raise ParseError(f"Identifier cannot start with '.': {identifier!r}")
        if '/' in identifier or '\\' in identifier:
            raise ParseError(f"Identifier cannot contain a path separator: {identifier!r}")
        if identifier == StackConfig.STACK_FILE_NAME:
            raise ParseError(f"Identifier {identifier!r} is reserved")
        return identifier

    def load_item(self, identifier: str) -> Optional[TodoItem]:
        """
        Load an item record.

        Returns:
            The item, or None if no record exists
        """
        path = self.config.item_file(self.check_identifier(identifier))
        if not path.exists():
            return None

        return TodoItem.from_dict(self._read_json(path))

    def save_item(self, identifier: str, item: TodoItem) -> None:
        """Write an item record, replacing any existing one"""
        path = self.config.item_file(self.check_identifier(identifier))
        self._write_json(path, item.to_dict())
        logger.debug(f"Saved item {identifier!r}")

    def delete_item(self, identifier: str) -> None:
        """
        Remove an item record.

        Raises:
            NotFoundError: No record exists for the identifier
        """
        path = self.config.item_file(self.check_identifier(identifier))
        try:
            path.unlink()
        except FileNotFoundError:
            raise NotFoundError(f"No such item: {identifier}", identifier) from None
        logger.debug(f"Deleted item {identifier!r}")

    def load_stack(self) -> List[str]:
        """Load the stack, newest first. A missing stack file is an empty stack."""
        path = self.config.stack_file
        if not path.exists():
            return []

        data = self._read_json(path)
        if not isinstance(data, list) or not all(isinstance(entry, str) for entry in data):
            raise ParseError(f"Stack file {path} is not a list of identifiers")
        return data

    def save_stack(self, identifiers: List[str]) -> None:
        """Replace the stack file"""
        self._write_json(self.config.stack_file, list(identifiers))
        logger.debug(f"Saved stack with {len(identifiers)} item(s)")

    @contextmanager
    def lock(self) -> Iterator[None]:
        """Hold an exclusive lock on the root for a read-modify-write cycle"""
        self.config.root.mkdir(parents=True, exist_ok=True)

        with open(self.config.lock_file, 'a+') as lock_file:
            if sys.platform == 'win32':
                lock_file.seek(0)
                msvcrt.locking(lock_file.fileno(), msvcrt.LK_LOCK, 1)
            else:
                fcntl.flock(lock_file, fcntl.LOCK_EX)
            try:
                yield
            finally:
                if sys.platform == 'win32':
                    lock_file.seek(0)
                    msvcrt.locking(lock_file.fileno(), msvcrt.LK_UNLCK, 1)
                else:
                    fcntl.flock(lock_file, fcntl.LOCK_UN)

    def _read_json(self, path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ParseError(f"Corrupt file {path}: {e}") from e

    def _write_json(self, path, data) -> None:
        """Write next to the target, then replace it in one rename"""
        self.config.root.mkdir(parents=True, exist_ok=True)
        fd, staging = tempfile.mkstemp(dir=self.config.root, prefix=".todo-stack-", suffix=".tmp")

        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(staging, path)
        except BaseException:
            if os.path.exists(staging):
                os.unlink(staging)
            raise
