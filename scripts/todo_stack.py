#!/usr/bin/env python3
"""
Todo Stack - personal to-do manager that keeps tasks as a stack

New tasks go on top. cycle, pull and finish reach past the top.

Usage:
    python todo_stack.py list [single|tags] [3d|timeless]
    python todo_stack.py show <item>
    python todo_stack.py push <item>      # deadline, tags, description from stdin
    python todo_stack.py pop [-n]
    python todo_stack.py cycle [n]
    python todo_stack.py pull <item>
    python todo_stack.py finish <item>
"""

import argparse
import sys
import logging
from pathlib import Path
from typing import List, Optional

# Add script directory to path to import todostack_lib
sys.path.insert(0, str(Path(__file__).parent))

from todostack_lib import (
    ConfigManager,
    StackConfig,
    Storage,
    StackManager,
    TodoStackError,
    parse_item,
    list_items,
    render_item,
    render_listing,
)

logger = logging.getLogger("todo_stack")

LIST_MODES = ("single", "tags")

USAGE = """\
Usage: todo-stack [--root PATH] [--set-root PATH] [--debug] <command> [args]

Commands:
  list [single|tags] [deadline|timeless]  - Show the stack, oldest first
  show <item>                             - Show one item
  push <item>                             - Push an item; reads deadline, tags
                                            and description from stdin
  pop [-n]                                - Pop the top item (-n: just show it)
  cycle [n]                               - Move the top item n places back (default 1)
  pull <item>                             - Move an item to the top
  finish <item>                           - Pull an item and pop it
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo-stack",
        description="Todo Stack - keep your tasks on a stack",
        add_help=False
    )
    parser.add_argument("--root", help="Root directory for this invocation")
    parser.add_argument("--set-root", help="Save the root directory in the config file")
    parser.add_argument("--debug", action="store_true", help="Write a debug log to the root directory")
    parser.add_argument("-h", "--help", action="store_true", help="Show usage")
    parser.add_argument("command", nargs="?")
    parser.add_argument("args", nargs=argparse.REMAINDER)
    return parser


def setup_logging(config: StackConfig, debug: bool = False) -> None:
    """Warnings to stderr; with debug, everything to the log file in the root"""
    handlers: List[logging.Handler] = []

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.WARNING)
    handlers.append(console)

    if debug:
        config.root.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.log_file))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=handlers,
        force=True
    )


def read_item_body(stream=None) -> Optional[str]:
    """
    Read deadline, tags and description until end of input.

    Returns:
        The text read, or None if the user cancelled with Ctrl+C
    """
    stream = stream or sys.stdin
    if stream.isatty():
        print("Deadline (e.g. 3d, 2w), tags, then description. Ctrl+D to save, Ctrl+C to cancel.",
              file=sys.stderr)

    try:
        return stream.read()
    except KeyboardInterrupt:
        return None


def cmd_list(storage: Storage, args: List[str]) -> int:
    mode = "full"
    if args and args[0] in LIST_MODES:
        mode = args.pop(0)
    deadline_filter = args[0] if args else None

    entries = list_items(storage, deadline_filter)
    if entries:
        print(render_listing(entries, mode))
    return 0


def cmd_push(manager: StackManager, args: List[str], stream=None) -> int:
    body = read_item_body(stream)
    if body is None:
        print()
        print("[CANCELLED] Nothing pushed")
        return 0

    if args:
        name = " ".join(args)
        item = parse_item(name + "\n" + body)
    else:
        item = parse_item(body)

    identifier = manager.push(item)
    print(f"[OK] Pushed: {identifier}")
    return 0


def cmd_pop(manager: StackManager, args: List[str]) -> int:
    keep = "-n" in args
    identifier, item = manager.pop(keep=keep)
    if item is None:
        print(f"[WARNING] {identifier} has no item record")
    else:
        print(render_item(item))
    return 0


def cmd_cycle(manager: StackManager, args: List[str]) -> int:
    n = int(args[0]) if args else 1
    stack = manager.cycle(n)
    print(f"[OK] Now on top: {stack[0]}")
    return 0


def dispatch(command: str, args: List[str], config: StackConfig, stream=None) -> int:
    """Run one command against the stack at config.root"""
    storage = Storage(config)
    manager = StackManager(storage)

    if command == "list":
        return cmd_list(storage, args)

    if command == "push":
        return cmd_push(manager, args, stream)

    if command == "pop":
        return cmd_pop(manager, args)

    if command == "cycle":
        return cmd_cycle(manager, args)

    # Remaining commands all take an item name
    if not args:
        print(f"Error: {command} requires an item", file=sys.stderr)
        return 0
    name = " ".join(args)

    if command == "show":
        print(render_item(manager.show(name)))
    elif command == "pull":
        stack = manager.pull(name)
        print(f"[OK] Now on top: {stack[0]}")
    elif command == "finish":
        identifier, item = manager.finish(name)
        print(f"[OK] Finished: {item.name if item else identifier}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI interface for the todo stack."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config_mgr = ConfigManager()

    if args.set_root:
        root = config_mgr.save_root(args.set_root)
        print(f"[OK] Root directory saved: {root}")
        if not args.command:
            return 0

    config = config_mgr.resolve(args.root)
    setup_logging(config, args.debug)
    logger.debug(f"Command: {args.command} {args.args}")

    commands = ("list", "show", "push", "pop", "cycle", "pull", "finish")
    if args.help or args.command not in commands:
        print(USAGE)
        return 0

    try:
        return dispatch(args.command, list(args.args), config)

    except (TodoStackError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.debug("Command failed", exc_info=True)
        return 0


if __name__ == "__main__":
    sys.exit(main())
