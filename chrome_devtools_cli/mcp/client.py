"""
MCP Client for JSON-RPC tool calls against the companion server.

This module provides a thin client over the MCP SDK session that exposes
the connect / call_tool / close contract used by the command dispatcher.
"""

import logging
from contextlib import AsyncExitStack
from typing import Any, Dict, Optional

from mcp import ClientSession
from mcp.shared.exceptions import McpError
from mcp.types import CallToolResult, Implementation

from .transport import StdioTransport

logger = logging.getLogger(__name__)


def _unwrap(error: BaseException) -> BaseException:
    """Reduce single-member task group errors to the exception that caused them."""
    nested = getattr(error, "exceptions", None)
    while nested and len(nested) == 1:
        error = nested[0]
        nested = getattr(error, "exceptions", None)
    return error


class MCPClientError(Exception):
    """Exception raised for MCP client errors."""
    def __init__(self, message: str, error_code: Optional[int] = None, error_data: Optional[Any] = None):
        self.message = message
        self.error_code = error_code
        self.error_data = error_data
        super().__init__(self.message)


class MCPClient:
    """
    Client for communicating with an MCP server via JSON-RPC.

    Owns the transport for its whole lifetime: ``connect`` spawns the server
    and performs the initialize handshake, ``close`` tears both down.
    """

    def __init__(
        self,
        server_name: str,
        transport: StdioTransport,
        client_name: str,
        client_version: str
    ):
        """
        Initialize MCP client.

        Args:
            server_name: Name of the MCP server, used in log messages
            transport: Transport layer for communication
            client_name: Name reported to the server during initialize
            client_version: Version reported to the server during initialize
        """
        self.server_name = server_name
        self.transport = transport
        self.client_info = Implementation(name=client_name, version=client_version)
        self.session: Optional[ClientSession] = None
        self.connected = False
        self._exit_stack: Optional[AsyncExitStack] = None

    async def connect(self):
        """
        Connect to the MCP server.

        Raises:
            MCPClientError: If the server cannot be started or initialized
        """
        logger.info(f"Connecting to MCP server: {self.server_name}")

        try:
            read_stream, write_stream = await self.transport.start()
        except Exception as e:
            raise MCPClientError(f"Failed to start transport for {self.server_name}: {_unwrap(e)}")

        exit_stack = AsyncExitStack()
        self._exit_stack = exit_stack
        try:
            self.session = await exit_stack.enter_async_context(
                ClientSession(read_stream, write_stream, client_info=self.client_info)
            )
            await self.session.initialize()
        except McpError as e:
            raise MCPClientError(
                f"Connection initialization failed: {e.error.message}",
                error_code=e.error.code,
                error_data=e.error.data
            )
        except Exception as e:
            raise MCPClientError(f"Connection initialization failed: {_unwrap(e)}")

        self.connected = True
        logger.info(f"Successfully connected to {self.server_name}")

    async def call_tool(self, tool_name: str, arguments: Dict[str, Any]) -> CallToolResult:
        """
        Call a tool on the MCP server.

        Args:
            tool_name: Name of the tool to call
            arguments: Tool arguments

        Returns:
            Tool execution result as returned by the server

        Raises:
            MCPClientError: If the server rejects the call
        """
        if not self.connected or self.session is None:
            raise MCPClientError("Client not connected to server")

        logger.debug(f"Calling tool {tool_name} with arguments: {arguments}")

        try:
            result = await self.session.call_tool(tool_name, arguments)
        except McpError as e:
            raise MCPClientError(
                e.error.message,
                error_code=e.error.code,
                error_data=e.error.data
            )
        except Exception as e:
            raise MCPClientError(f"Tool call error: {_unwrap(e)}")

        if result.isError:
            logger.info(f"Tool {tool_name} reported an error result")
        else:
            logger.debug(f"Tool {tool_name} executed successfully")
        return result

    async def close(self):
        """Disconnect from the MCP server and stop its process."""
        if self._exit_stack is None and not self.transport.connected:
            return

        logger.info(f"Disconnecting from MCP server: {self.server_name}")

        self.connected = False
        self.session = None

        exit_stack, self._exit_stack = self._exit_stack, None
        try:
            if exit_stack is not None:
                await exit_stack.aclose()
        finally:
            await self.transport.stop()

        logger.info(f"Disconnected from {self.server_name}")

