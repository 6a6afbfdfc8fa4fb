"""
Command dispatcher.

Runs exactly one companion server tool per process invocation: spawn the
server, optionally prime it with a page snapshot, issue the requested call
and report the outcome through the exit code.
"""

import asyncio
import json
import logging
import sys
from typing import Any, Optional

from ..config.constants import (
    CLIENT_NAME,
    CLIENT_VERSION,
    COMMANDS_REQUIRING_SNAPSHOT,
    HEADLESS_FLAG,
    SNAPSHOT_COMMAND,
)
from ..config.settings import load_server_config
from ..mcp.client import MCPClient
from ..mcp.transport import StdioTransport
from .models import ToolCall

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def error_message(error: BaseException) -> str:
    """Display text for a failure: its message field if it has one, else its string form."""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error)


def format_result(result: Any) -> str:
    """Render a tool result as indented JSON."""
    if hasattr(result, "model_dump"):
        result = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(result, indent=2, ensure_ascii=False)


def create_client(flag: Optional[str]) -> MCPClient:
    """Build an unconnected client for the configured companion server."""
    server_config = load_server_config()
    headless = flag == HEADLESS_FLAG

    transport = StdioTransport(
        command=server_config.command,
        args=server_config.launch_args(headless=headless),
        env=server_config.launch_env(),
        working_dir=server_config.working_dir
    )
    return MCPClient(
        server_name=server_config.name,
        transport=transport,
        client_name=CLIENT_NAME,
        client_version=CLIENT_VERSION
    )


async def run_command(command: str, arg: Optional[str], flag: Optional[str]) -> int:
    """
    Run a single tool against the companion server.

    Args:
        command: The tool name to execute
        arg: JSON object string with the tool arguments, or None
        flag: Optional mode flag; ``--headless`` starts the browser headless

    Returns:
        Process exit code: 0 on success, 1 on any failure
    """
    print(" ".join(token for token in (command, arg, flag) if token))

    client: Optional[MCPClient] = None
    try:
        tool_call = ToolCall.from_cli(command, arg)

        client = create_client(flag)
        await client.connect()

        if tool_call.name in COMMANDS_REQUIRING_SNAPSHOT:
            print("Taking snapshot before executing command...")
            await client.call_tool(SNAPSHOT_COMMAND, {})

        result = await client.call_tool(tool_call.name, tool_call.arguments)

        print(format_result(result))

        await client.close()
        return EXIT_SUCCESS

    except Exception as e:
        logger.debug(f"Command {command} failed", exc_info=True)
        print(f"Error running command: {error_message(e)}", file=sys.stderr)
        if client is not None:
            # The stdio task group must be exited from the task that entered it
            await _release(client)
        return EXIT_FAILURE


async def _release(client: MCPClient):
    """Tear down the companion server after a failure without masking it."""
    try:
        await client.close()
    except Exception as e:
        logger.debug(f"Error while releasing {client.server_name}: {e}")


def execute_command(command: str, arg: Optional[str] = None, flag: Optional[str] = None):
    """Run a command and terminate the process with its exit code."""
    sys.exit(asyncio.run(run_command(command, arg, flag)))
