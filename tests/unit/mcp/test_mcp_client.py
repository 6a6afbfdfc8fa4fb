"""
Unit tests for the MCP client and stdio transport.
"""

import pytest
from contextlib import asynccontextmanager
from unittest.mock import Mock, AsyncMock, patch

from mcp.shared.exceptions import McpError
from mcp.types import CallToolResult, ErrorData, TextContent

from chrome_devtools_cli.mcp.client import MCPClient, MCPClientError
from chrome_devtools_cli.mcp.transport import StdioTransport


@pytest.fixture
def mock_transport():
    """Mock stdio transport for testing."""
    transport = Mock(spec=StdioTransport)
    transport.connected = False

    async def start():
        transport.connected = True
        return ("read-stream", "write-stream")

    async def stop():
        transport.connected = False

    transport.start = AsyncMock(side_effect=start)
    transport.stop = AsyncMock(side_effect=stop)
    return transport


@pytest.fixture
def client(mock_transport):
    """Create MCPClient instance for testing."""
    return MCPClient(
        server_name="chrome-devtools",
        transport=mock_transport,
        client_name="chrome-devtools-cli-headless",
        client_version="1"
    )


@pytest.fixture
def session_cls(mock_session):
    with patch("chrome_devtools_cli.mcp.client.ClientSession", return_value=mock_session) as cls:
        yield cls


class TestMCPClient:
    """Test cases for MCPClient."""

    @pytest.mark.asyncio
    async def test_connect(self, client, mock_transport, session_cls, mock_session):
        """Test connect starts the transport and initializes the session."""
        await client.connect()

        assert client.connected is True
        mock_transport.start.assert_awaited_once()
        session_cls.assert_called_once_with("read-stream", "write-stream", client_info=client.client_info)
        mock_session.initialize.assert_awaited_once()
        assert client.client_info.name == "chrome-devtools-cli-headless"
        assert client.client_info.version == "1"

    @pytest.mark.asyncio
    async def test_connect_transport_failure(self, client, mock_transport, session_cls):
        """Test a server that cannot be spawned raises MCPClientError."""
        mock_transport.start.side_effect = FileNotFoundError("npx not found")

        with pytest.raises(MCPClientError) as exc_info:
            await client.connect()

        assert "npx not found" in exc_info.value.message
        assert client.connected is False
        session_cls.assert_not_called()

    @pytest.mark.asyncio
    async def test_connect_unwraps_task_group_errors(self, client, mock_transport, session_cls):
        """Test single-member exception groups report their inner error."""
        mock_transport.start.side_effect = ExceptionGroup("unhandled errors", [OSError("spawn failed")])

        with pytest.raises(MCPClientError) as exc_info:
            await client.connect()

        assert exc_info.value.message.endswith("spawn failed")

    @pytest.mark.asyncio
    async def test_connect_initialize_rejected(self, client, session_cls, mock_session):
        """Test handshake errors keep the JSON-RPC error details."""
        mock_session.initialize.side_effect = McpError(ErrorData(code=-32600, message="Unsupported protocol"))

        with pytest.raises(MCPClientError) as exc_info:
            await client.connect()

        assert "Unsupported protocol" in exc_info.value.message
        assert exc_info.value.error_code == -32600
        assert client.connected is False

    @pytest.mark.asyncio
    async def test_call_tool(self, client, session_cls, mock_session):
        """Test tool calls are forwarded to the session."""
        result = CallToolResult(content=[TextContent(type="text", text="ok")])
        mock_session.call_tool.return_value = result
        await client.connect()

        assert await client.call_tool("navigate_page", {"url": "https://example.com"}) is result
        mock_session.call_tool.assert_awaited_once_with("navigate_page", {"url": "https://example.com"})

    @pytest.mark.asyncio
    async def test_call_tool_error_result_is_returned(self, client, session_cls, mock_session):
        """Test results flagged as errors are still returned to the caller."""
        result = CallToolResult(content=[TextContent(type="text", text="No element")], isError=True)
        mock_session.call_tool.return_value = result
        await client.connect()

        assert await client.call_tool("click", {"uid": "1"}) is result

    @pytest.mark.asyncio
    async def test_call_tool_rejected(self, client, session_cls, mock_session):
        """Test JSON-RPC errors become MCPClientError with the server message."""
        mock_session.call_tool.side_effect = McpError(
            ErrorData(code=-32602, message="Unknown tool: nope", data={"tool": "nope"})
        )
        await client.connect()

        with pytest.raises(MCPClientError) as exc_info:
            await client.call_tool("nope", {})

        assert exc_info.value.message == "Unknown tool: nope"
        assert exc_info.value.error_code == -32602
        assert exc_info.value.error_data == {"tool": "nope"}

    @pytest.mark.asyncio
    async def test_call_tool_unexpected_error(self, client, session_cls, mock_session):
        """Test other failures are wrapped with their text."""
        mock_session.call_tool.side_effect = ConnectionResetError("pipe closed")
        await client.connect()

        with pytest.raises(MCPClientError) as exc_info:
            await client.call_tool("list_pages", {})

        assert exc_info.value.message == "Tool call error: pipe closed"

    @pytest.mark.asyncio
    async def test_call_tool_not_connected(self, client):
        """Test calling a tool before connecting fails."""
        with pytest.raises(MCPClientError) as exc_info:
            await client.call_tool("list_pages", {})

        assert "not connected" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_close(self, client, mock_transport, session_cls, mock_session):
        """Test close exits the session and stops the transport."""
        await client.connect()

        await client.close()

        assert client.connected is False
        assert client.session is None
        mock_session.__aexit__.assert_awaited_once()
        mock_transport.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, client, mock_transport, session_cls):
        """Test a second close does nothing."""
        await client.connect()
        await client.close()
        await client.close()

        mock_transport.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_without_connect(self, client, mock_transport):
        """Test closing a client that never connected is a no-op."""
        await client.close()

        mock_transport.stop.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_close_after_failed_initialize(self, client, mock_transport, session_cls, mock_session):
        """Test a half-open connection is still torn down."""
        mock_session.initialize.side_effect = RuntimeError("server exited")
        with pytest.raises(MCPClientError):
            await client.connect()

        await client.close()

        mock_session.__aexit__.assert_awaited_once()
        mock_transport.stop.assert_awaited_once()


class TestStdioTransport:
    """Test cases for StdioTransport."""

    def test_server_parameters(self):
        transport = StdioTransport(
            command="npx",
            args=["-y", "chrome-devtools-mcp@latest", "--headless=true"],
            env={"DEBUG": "1"},
            working_dir="/tmp"
        )

        params = transport.server_parameters

        assert params.command == "npx"
        assert params.args == ["-y", "chrome-devtools-mcp@latest", "--headless=true"]
        assert params.env == {"DEBUG": "1"}
        assert str(params.cwd) == "/tmp"

    @pytest.mark.asyncio
    async def test_start_and_stop(self):
        """Test the SDK stdio client is entered on start and exited on stop."""
        events = []

        @asynccontextmanager
        async def fake_stdio_client(params):
            events.append(("enter", params.command))
            yield ("read-stream", "write-stream")
            events.append(("exit", params.command))

        transport = StdioTransport(command="npx", args=["-y", "chrome-devtools-mcp@latest"])

        with patch("chrome_devtools_cli.mcp.transport.stdio_client", fake_stdio_client):
            streams = await transport.start()
            assert streams == ("read-stream", "write-stream")
            assert transport.connected is True

            await transport.stop()

        assert transport.connected is False
        assert events == [("enter", "npx"), ("exit", "npx")]

    @pytest.mark.asyncio
    async def test_start_failure(self):
        """Test spawn errors propagate and leave the transport disconnected."""
        @asynccontextmanager
        async def failing_stdio_client(params):
            raise FileNotFoundError(params.command)
            yield

        transport = StdioTransport(command="missing-binary")

        with patch("chrome_devtools_cli.mcp.transport.stdio_client", failing_stdio_client):
            with pytest.raises(FileNotFoundError):
                await transport.start()

        assert transport.connected is False

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        transport = StdioTransport(command="npx")

        await transport.stop()

        assert transport.connected is False
