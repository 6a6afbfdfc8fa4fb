"""
MCP stdio transport for the companion browser-automation server.

This module spawns the companion process and exposes the line-oriented
read/write streams the MCP client session talks over. Framing and process
handling are delegated to the official MCP SDK.
"""

import logging
from contextlib import AsyncExitStack
from typing import Any, Dict, List, Optional, Tuple

from mcp import StdioServerParameters
from mcp.client.stdio import stdio_client

logger = logging.getLogger(__name__)


class StdioTransport:
    """
    Standard I/O transport for MCP servers.

    Communicates with MCP servers through stdin/stdout pipes.
    """

    def __init__(
        self,
        command: str,
        args: Optional[List[str]] = None,
        env: Optional[Dict[str, str]] = None,
        working_dir: Optional[str] = None
    ):
        """
        Initialize stdio transport.

        Args:
            command: Executable that starts the MCP server
            args: Arguments passed to the executable
            env: Environment variables for the server process
            working_dir: Working directory for the server process
        """
        self.command = command
        self.args = list(args or [])
        self.env = env
        self.working_dir = working_dir
        self.connected = False
        self._exit_stack: Optional[AsyncExitStack] = None

    @property
    def server_parameters(self) -> StdioServerParameters:
        """Launch parameters handed to the SDK."""
        return StdioServerParameters(
            command=self.command,
            args=self.args,
            env=self.env,
            cwd=self.working_dir
        )

    async def start(self) -> Tuple[Any, Any]:
        """
        Start the server process.

        Returns:
            The (read, write) stream pair of the running server
        """
        logger.info(f"Starting stdio transport with command: {' '.join([self.command, *self.args])}")

        exit_stack = AsyncExitStack()
        try:
            read_stream, write_stream = await exit_stack.enter_async_context(
                stdio_client(self.server_parameters)
            )
        except BaseException:
            await exit_stack.aclose()
            raise

        self._exit_stack = exit_stack
        self.connected = True

        logger.info("Stdio transport started successfully")
        return read_stream, write_stream

    async def stop(self):
        """Stop the stdio transport and server process."""
        if self._exit_stack is None:
            return

        logger.info("Stopping stdio transport")

        exit_stack, self._exit_stack = self._exit_stack, None
        self.connected = False
        await exit_stack.aclose()

        logger.info("Stdio transport stopped")
