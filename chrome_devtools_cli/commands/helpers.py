"""
Help and version output for the command line.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from .. import __distribution__, __version__
from ..config.constants import COMMAND_CATALOGUE, COMMANDS, COMMANDS_INFO

logger = logging.getLogger(__name__)


def get_current_version() -> str:
    """Installed package version, falling back to the source tree version."""
    try:
        return version(__distribution__)
    except PackageNotFoundError:
        logger.debug(f"{__distribution__} is not installed, using source version")
        return __version__


def print_available_commands():
    print("Available commands:")
    for index, (name, description) in enumerate(zip(COMMANDS, COMMANDS_INFO), start=1):
        print(f"{index}. {name} - {description}")


def print_command_detail(command_name: str):
    """
    Print the description and parameters of one command.

    Blank or unknown names print a notice followed by the full command list.
    """
    name = command_name.strip()

    if not name:
        print("Please provide a command name.")
        print_available_commands()
        return

    info = COMMAND_CATALOGUE.get(name)
    if info is None:
        print(f"Unknown command: {name}")
        print_available_commands()
        return

    print(f"Command: {info.name}")
    print(f"Description: {info.description}")
    print("Parameters:")
    print(info.parameters or "  (none)")
