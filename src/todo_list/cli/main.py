# src/todo_list/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, parses one subcommand and runs it.
Store failures (I/O, lock, malformed file) end the process with status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry as command_registry
from ..config import get_settings
from ..logging_setup import setup_logging
from ..tasks.task_codec import DeserializationError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("description", help="What needs doing.")
    parser.add_argument("-d", "--due", default=None, help="Due date: today or tomorrow.")


def _list_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-a", "--all", action="store_true", help="Include completed tasks.")


def _id_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("task_id", type=int, help="Task ID.")


_ARGUMENTS: dict[str, Callable[[argparse.ArgumentParser], None]] = {
    "add": _add_arguments,
    "list": _list_arguments,
    "complete": _id_arguments,
    "delete": _id_arguments,
}


def build_parser(prog: str = "tasks") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description="A CLI tool to manage your tasks")
    sub = parser.add_subparsers(dest="command", required=True)
    for name in command_registry.names():
        sp = sub.add_parser(
            name,
            aliases=command_registry.aliases_for(name),
            help=command_registry.help_for(name),
        )
        configure = _ARGUMENTS.get(name)
        if configure is not None:
            configure(sp)
    return parser


def main(argv: Sequence[str] | None = None, *, settings=None) -> int:
    if settings is None:
        settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=getattr(settings, "log_dir", None), console_level=console_level)

    parser = build_parser(prog=getattr(settings, "app_name", "tasks"))
    args = parser.parse_args(argv)

    try:
        state = create_initial_state(settings=settings)
        reply = command_registry.handle(state, args.command, args)
    except DeserializationError as e:
        logger.debug("Task file is malformed.", exc_info=True)
        print(f"Error: malformed task file {settings.tasks_path}: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except OSError as e:
        logger.debug("Task store I/O failed.", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    print(reply.text, file=sys.stdout if reply.ok else sys.stderr)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
