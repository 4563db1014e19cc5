"""
Stack Manager - ordered todo stack with push, pop, cycle, pull and finish

The stack is a list of identifiers, newest first. Every operation is a
whole-file read-modify-write of the stack, done while holding the storage
lock so concurrent invocations cannot lose each other's updates.
"""

import logging
from typing import Optional, List, Tuple, TypeVar

from .errors import NotFoundError
from .models import TodoItem, make_identifier
from .storage import Storage

logger = logging.getLogger(__name__)

T = TypeVar('T')


def splice_list(seq: List[T], n: int, replacement: Optional[T] = None):
    """
    Remove or insert one element.

    Without a replacement, remove the element at index n and return
    (element, remaining list). With a replacement, return a new list with
    the replacement inserted at index n, clamped to the end.
    """
    if replacement is None:
        if not 0 <= n < len(seq):
            raise IndexError(f"splice index {n} out of range for {len(seq)} element(s)")
        return seq[n], seq[:n] + seq[n + 1:]

    n = max(0, min(n, len(seq)))
    return seq[:n] + [replacement] + seq[n:]


class StackManager:
    """Todo stack operations over a Storage root"""

    def __init__(self, storage: Storage):
        self.storage = storage

    def identifiers(self) -> List[str]:
        """Current stack, newest first"""
        with self.storage.lock():
            return self.storage.load_stack()

    def show(self, identifier: str) -> TodoItem:
        """
        Load one item.

        Raises:
            NotFoundError: No record for the identifier
        """
        identifier = make_identifier(identifier)
        with self.storage.lock():
            item = self.storage.load_item(identifier)
        if item is None:
            raise NotFoundError(f"No such item: {identifier}", identifier)
        return item

    def push(self, item: TodoItem, identifier: Optional[str] = None) -> str:
        """
        Put an item on top of the stack.

        An identifier already on the stack moves to the top instead of
        appearing twice; its record is replaced.

        Returns:
            The identifier pushed
        """
        identifier = make_identifier(identifier or item.name)
        self.storage.check_identifier(identifier)

        with self.storage.lock():
            stack = [entry for entry in self.storage.load_stack() if entry != identifier]
            self.storage.save_item(identifier, item)
            self.storage.save_stack([identifier] + stack)

        logger.info(f"Pushed {identifier!r} (stack depth {len(stack) + 1})")
        return identifier

    def pop(self, keep: bool = False) -> Tuple[str, Optional[TodoItem]]:
        """
        Take the top item off the stack.

        Args:
            keep: Only look at the top item, change nothing

        Returns:
            (identifier, item). item is None if the stack referenced a
            missing record, which is dropped from the stack.

        Raises:
            NotFoundError: The stack is empty
        """
        with self.storage.lock():
            return self._pop(keep)

    def cycle(self, n: int = 1) -> List[str]:
        """
        Move the top item n positions towards the bottom.

        Positions past the end put the item last. cycle(0) changes nothing.

        Returns:
            The new stack

        Raises:
            NotFoundError: The stack is empty
            ValueError: n is negative
        """
        if n < 0:
            raise ValueError(f"Cycle distance must not be negative: {n}")

        with self.storage.lock():
            stack = self.storage.load_stack()
            if not stack:
                raise NotFoundError("Stack is empty")

            top, rest = splice_list(stack, 0)
            stack = splice_list(rest, n, top)
            self.storage.save_stack(stack)

        logger.info(f"Cycled {top!r} back {n} position(s)")
        return stack

    def pull(self, identifier: str) -> List[str]:
        """
        Move a named item to the top of the stack.

        Returns:
            The new stack

        Raises:
            NotFoundError: The identifier is not on the stack; nothing changes
        """
        with self.storage.lock():
            return self._pull(make_identifier(identifier))

    def finish(self, identifier: str) -> Tuple[str, Optional[TodoItem]]:
        """
        Pull a named item and pop it.

        Unknown identifiers raise before anything is touched, so the item
        that happens to be on top is never removed by mistake.

        Raises:
            NotFoundError: The identifier is not on the stack
        """
        with self.storage.lock():
            self._pull(make_identifier(identifier))
            return self._pop(keep=False)

    def _pull(self, identifier: str) -> List[str]:
        stack = self.storage.load_stack()
        if identifier not in stack:
            raise NotFoundError(f"Not on the stack: {identifier}", identifier)

        position = stack.index(identifier)
        _, rest = splice_list(stack, position)
        stack = splice_list(rest, 0, identifier)
        self.storage.save_stack(stack)

        logger.info(f"Pulled {identifier!r} from position {position}")
        return stack

    def _pop(self, keep: bool) -> Tuple[str, Optional[TodoItem]]:
        stack = self.storage.load_stack()
        if not stack:
            raise NotFoundError("Stack is empty")

        top, rest = splice_list(stack, 0)
        item = self.storage.load_item(top)

        if keep:
            return top, item

        if item is None:
            logger.warning(f"Item record for {top!r} is missing, dropping it from the stack")
        else:
            self.storage.delete_item(top)
        self.storage.save_stack(rest)

        logger.info(f"Popped {top!r}")
        return top, item
