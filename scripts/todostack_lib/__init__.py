"""
Todo Stack Library
Personal to-do manager that keeps tasks as an ordered stack
"""

from .errors import TodoStackError, NotFoundError, ParseError
from .deadline import Deadline, translate, is_before
from .models import TodoItem, parse_item, make_identifier
from .config_manager import ConfigManager, StackConfig
from .storage import Storage
from .stack_manager import StackManager, splice_list
from .listing import list_items, TIMELESS
from .display import render_item, render_listing, format_deadline

__all__ = [
    'TodoStackError',
    'NotFoundError',
    'ParseError',
    'Deadline',
    'translate',
    'is_before',
    'TodoItem',
    'parse_item',
    'make_identifier',
    'ConfigManager',
    'StackConfig',
    'Storage',
    'StackManager',
    'splice_list',
    'list_items',
    'TIMELESS',
    'render_item',
    'render_listing',
    'format_deadline',
]
