#!/usr/bin/env python3
"""
todo - plain-text todo lists from the terminal

Usage:
    todo lists
    todo list [--list NAME]
    todo show [--list NAME]
    todo use <name>
    todo add <text> [--list NAME]
    todo edit

Examples:
    todo add "Buy milk"
    todo add "Book flights" --list travel
    todo use travel
    todo show
    echo "New todo" | todo
    printf "Todo 1\\nTodo 2" | todo

List files live in the configured directory (default ~/todos) and use a
small line grammar: "* [ ]" / "* [x]" todos, "=", "==", "===" headers,
"* " bullets and free text.
"""

import argparse
import logging
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from .bootstrap import available_lists, bootstrap, ensure_list_exists
from .config import Config, default_config_path, load_config, normalize_list_name, save_config
from .display import print_document
from .errors import TodoError
from .parser import parse_file, write_file

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# --- helpers ---

def resolve_list(config: Config, list_name: Optional[str] = None) -> tuple[Path, str]:
    """
    Resolve a list name (or the active list) to its path and file name.

    Args:
        config: Loaded config
        list_name: Name given on the command line, if any

    Returns:
        Tuple of (path, file_name)
    """
    file_name = config.list_file_name(list_name)
    return config.todo_dir / file_name, file_name


def add_todos(config: Config, texts: Iterable[str], list_name: Optional[str] = None) -> List[str]:
    """
    Append todos to a list, writing the file once.

    Args:
        config: Loaded config
        texts: Todo texts; multi-line entries add one todo per line and
            blank lines are skipped
        list_name: Target list (defaults to the active list)

    Returns:
        The texts that were added
    """
    path, file_name = resolve_list(config, list_name)
    ensure_list_exists(path)

    document = parse_file(path, file_name)
    added = []
    for text in texts:
        for part in text.splitlines():
            part = part.strip()
            if not part:
                continue
            document.append_todo(part)
            added.append(part)

    if added:
        write_file(document)
        for text in added:
            print(f"Added todo to {file_name}: {text}")
    return added


# --- lists ---

def lists_cmd(args):
    """Print every list file, marking the active one."""
    config = args.config

    files = available_lists(config)
    if not files:
        print("No todo lists found.")
        return

    active = config.list_file_name()
    for file_name in files:
        if file_name == active:
            print(f"* {file_name} (active)")
        else:
            print(f"  {file_name}")


# --- list ---

def list_cmd(args):
    """Print a list with styling and a summary."""
    path, file_name = resolve_list(args.config, args.list)
    if not path.exists():
        print(f"List '{file_name}' does not exist", file=sys.stderr)
        sys.exit(1)

    print_document(parse_file(path, file_name))


# --- show ---

def show_cmd(args):
    """Open the interactive view."""
    # curses is only needed (and only available on POSIX) for this command
    from .tui import run_session

    path, file_name = resolve_list(args.config, args.list)
    ensure_list_exists(path)
    run_session(path, file_name)


# --- use ---

def use_cmd(args):
    """Switch the active list."""
    config = args.config

    list_name = normalize_list_name(args.list_name)
    config.todo.active_list = list_name
    save_config(config, args.config_path)

    print(f"Switched to list: {list_name}.{config.todo.list_extension}")
    ensure_list_exists(config.list_path())


# --- add ---

def add_cmd(args):
    """Add a single todo."""
    add_todos(args.config, [args.todo], args.list)


# --- edit ---

def edit_cmd(args):
    """Open the active list in the configured editor."""
    config = args.config

    path = ensure_list_exists(config.list_path())
    command = config.editor.command
    log.debug("Running editor: %s %s", command, path)

    try:
        result = subprocess.run([*shlex.split(command), str(path)])
    except (OSError, ValueError) as exc:
        print(f"Failed to open editor '{command}': {exc}", file=sys.stderr)
        print("Make sure the editor command is correct in your config.", file=sys.stderr)
        sys.exit(1)

    if result.returncode != 0:
        log.warning("Editor '%s' exited with status %d", command, result.returncode)
        print(f"Editor exited with status: {result.returncode}", file=sys.stderr)


# --- no command ---

def default_cmd(args):
    """Add piped stdin lines to the active list, or show the active list name."""
    config = args.config

    if not sys.stdin.isatty():
        add_todos(config, sys.stdin)
        return

    print(f"Active list: {config.list_file_name()}")
    print("Use --help to see available commands")


# --- main ---

def build_parser(interactive: bool = True) -> argparse.ArgumentParser:
    """
    Build the argument parser.

    Args:
        interactive: Include the curses-based "show" command

    Returns:
        Configured parser
    """
    parser = argparse.ArgumentParser(
        prog="todo",
        description="A simple todo list manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('--config', dest='config_file', type=Path, default=None,
                        help='Config file (default: $TODO_CONFIG or ~/.config/todo/config.toml)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    parser.set_defaults(func=default_cmd)
    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # --- lists ---
    lists_p = subparsers.add_parser('lists', help='List all todo files')
    lists_p.set_defaults(func=lists_cmd)

    # --- list ---
    list_p = subparsers.add_parser('list', help='Print the active list or a named list')
    list_p.add_argument('-l', '--list', help='List to display (defaults to active list)')
    list_p.set_defaults(func=list_cmd)

    # --- show ---
    if interactive:
        show_p = subparsers.add_parser('show', help='Interactive view to toggle todos')
        show_p.add_argument('-l', '--list', help='List to display (defaults to active list)')
        show_p.set_defaults(func=show_cmd)

    # --- use ---
    use_p = subparsers.add_parser('use', help='Switch to a different todo list')
    use_p.add_argument('list_name', help='Name of the list')
    use_p.set_defaults(func=use_cmd)

    # --- add ---
    add_p = subparsers.add_parser('add', help='Add a todo to the active list or a named list')
    add_p.add_argument('todo', help='The todo text to add')
    add_p.add_argument('-l', '--list', help='List to add to (defaults to active list)')
    add_p.set_defaults(func=add_cmd)

    # --- edit ---
    edit_p = subparsers.add_parser('edit', help='Open the active list in the configured editor')
    edit_p.set_defaults(func=edit_cmd)

    return parser


def run(argv: Optional[List[str]] = None, interactive: bool = True) -> int:
    """
    Parse arguments and dispatch a command.

    Returns:
        Process exit status
    """
    parser = build_parser(interactive)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    args.config_path = args.config_file or default_config_path()
    try:
        args.config = load_config(args.config_path)
        bootstrap(args.config)
        args.func(args)
    except TodoError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


def main() -> None:
    """Entry point for the full tool."""
    sys.exit(run())


def edit_main() -> None:
    """Entry point for the editor-only tool (no interactive view)."""
    sys.exit(run(interactive=False))


if __name__ == '__main__':
    main()
