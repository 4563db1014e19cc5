"""
Exceptions raised by the todo stack engine
"""


class TodoStackError(Exception):
    """Base exception for todo stack errors"""
    pass


class NotFoundError(TodoStackError):
    """Item record or stack position missing"""
    def __init__(self, message: str, identifier: str = None):
        super().__init__(message)
        self.identifier = identifier


class ParseError(TodoStackError):
    """Malformed item input or corrupt file contents"""
    pass
