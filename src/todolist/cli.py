"""Command-line interface for the todo list."""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import sys
from typing import TextIO

from todolist import __version__
from todolist.errors import StorageError
from todolist.formatter import FormatType, TerminalRenderer
from todolist.storage import DEFAULT_DB_PATH, FileStorage, debug_enabled
from todolist.store import TodoStore
from todolist.view import ViewController

logger = logging.getLogger(__name__)

SHELL_HELP = """Commands:
  add [TITLE]       open a new row, optionally with a title
  edit ID TITLE     change the title of a todo
  delete ID         remove a todo
  sort              sort by title, alternating direction
  list              show the list
  help              show this help
  quit              leave the shell"""


def _db_path(args: argparse.Namespace) -> str:
    return args.db or os.environ.get("TODOLIST_DB") or DEFAULT_DB_PATH


def _run_shell(controller: ViewController, renderer: TerminalRenderer, stdin: TextIO) -> int:
    """Read gestures line by line until EOF or quit."""
    interactive = stdin.isatty()
    renderer.flush()
    while True:
        if interactive:
            print("> ", end="", flush=True)
        line = stdin.readline()
        if not line:
            break
        try:
            words = shlex.split(line)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            continue
        if not words:
            continue

        command, rest = words[0].lower(), words[1:]
        if command in ("quit", "exit"):
            break
        if command == "help":
            print(SHELL_HELP)
            continue

        if command in ("edit", "delete", "del") and rest:
            try:
                todo_id = int(rest[0])
            except ValueError:
                print(f"Error: ID must be an integer in {line.strip()!r}", file=sys.stderr)
                continue

        if command == "list":
            gesture: tuple = ()
        elif command == "add":
            gesture = ("add", " ".join(rest))
        elif command == "sort":
            gesture = ("sort",)
        elif command == "edit" and len(rest) >= 2:
            gesture = ("edit", todo_id, " ".join(rest[1:]))
        elif command in ("delete", "del") and len(rest) == 1:
            gesture = ("delete", todo_id)
        else:
            print(f"Error: invalid command {line.strip()!r}, type 'help'", file=sys.stderr)
            continue

        if gesture:
            try:
                controller.dispatch(*gesture)
            except (StorageError, OSError) as e:
                print(f"Error: {e}", file=sys.stderr)
                continue
        renderer.flush()
    return 0


def run_command(args: argparse.Namespace, stdin: TextIO | None = None) -> int:
    """Run a parsed command. Returns the process exit code."""
    renderer = TerminalRenderer(FormatType(args.format))
    try:
        store = TodoStore(FileStorage(_db_path(args)))
        controller = ViewController(store, renderer, ascending=not getattr(args, "descending", False))

        if args.command == "shell":
            return _run_shell(controller, renderer, stdin if stdin is not None else sys.stdin)

        if args.command == "add":
            ok = controller.dispatch("add", args.title)
        elif args.command == "edit":
            ok = controller.dispatch("edit", args.id, args.title)
        elif args.command == "delete":
            ok = controller.dispatch("delete", args.id)
        elif args.command == "sort":
            ok = controller.dispatch("sort")
        else:
            ok = True
    except (StorageError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    renderer.flush()
    return 0 if ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todolist", description="Single-list todo manager")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--db",
        help=f"Storage file (default: $TODOLIST_DB or {DEFAULT_DB_PATH})",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=[f.value for f in FormatType],
        default=FormatType.TABLE.value,
        help="Output format",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("list", help="List todos")

    add_parser = subparsers.add_parser("add", help="Add a todo (empty title opens a new row)")
    add_parser.add_argument("title", nargs="?", default="", help="Todo title")

    edit_parser = subparsers.add_parser("edit", help="Change the title of a todo")
    edit_parser.add_argument("id", type=int, help="Todo ID")
    edit_parser.add_argument("title", help="New title")

    delete_parser = subparsers.add_parser("delete", help="Delete a todo")
    delete_parser.add_argument("id", type=int, help="Todo ID")

    sort_parser = subparsers.add_parser("sort", help="Sort todos by title")
    sort_parser.add_argument("--descending", action="store_true", help="Sort Z to A")

    subparsers.add_parser("shell", help="Interactive session")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    logging.basicConfig(
        level=logging.DEBUG if debug_enabled() else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(run_command(args))


if __name__ == "__main__":
    main()
