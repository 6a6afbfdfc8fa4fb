"""
Command-line interface for the chrome-devtools CLI.

Usage:
    chrome-devtools-cli                          list available commands
    chrome-devtools-cli help [command]           show details for a command
    chrome-devtools-cli <command> [json] [flag]  run a command
"""

import argparse
import logging
import sys
from typing import List, Optional

from .commands.helpers import get_current_version, print_available_commands, print_command_detail
from .commands.runner import execute_command
from .config.constants import HEADLESS_FLAG
from .config.settings import DEFAULT_LOG_LEVEL, get_log_level

HELP_COMMAND = "help"


def configure_logging():
    level = getattr(logging, get_log_level(), None)
    if not isinstance(level, int):
        level = getattr(logging, DEFAULT_LOG_LEVEL)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chrome-devtools-cli",
        description="Run a single Chrome DevTools MCP tool and print its JSON result"
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=get_current_version()
    )
    parser.add_argument(
        "command",
        nargs="?",
        help="Tool to run, or 'help' to describe a tool"
    )
    parser.add_argument(
        "arguments",
        nargs="?",
        help="Tool arguments as a JSON object"
    )
    parser.add_argument(
        HEADLESS_FLAG,
        dest="flag",
        action="store_const",
        const=HEADLESS_FLAG,
        help="Run the browser without a visible window"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    configure_logging()

    parser = build_parser()
    args, extra = parser.parse_known_args(argv)

    if not args.command:
        print_available_commands()
        return 0

    if args.command == HELP_COMMAND:
        if args.arguments is None:
            print_available_commands()
        else:
            print_command_detail(args.arguments)
        return 0

    # Unrecognised flags are passed through; the runner only acts on --headless
    flag = args.flag or (extra[0] if extra else None)
    execute_command(args.command, args.arguments, flag)
    return 0
