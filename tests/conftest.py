"""
Pytest configuration and shared fixtures for chrome-devtools CLI tests.
"""

import pytest
from pathlib import Path
from unittest.mock import Mock, AsyncMock, patch

from chrome_devtools_cli.config.settings import CONFIG_ENV_VAR, LOG_LEVEL_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch) -> Path:
    """Point the CLI at a config file that does not exist unless a test writes it."""
    config_path = tmp_path / "config.yaml"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_path))
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    return config_path


@pytest.fixture
def mock_mcp_client():
    """Mock MCP client with the connect / call_tool / close contract."""
    client = Mock()
    client.server_name = "chrome-devtools"
    client.connect = AsyncMock(return_value=None)
    client.call_tool = AsyncMock(return_value={"result": "success"})
    client.close = AsyncMock(return_value=None)
    return client


@pytest.fixture
def patched_runner(mock_mcp_client):
    """Patch the runner's transport and client classes."""
    with patch("chrome_devtools_cli.commands.runner.StdioTransport") as transport_cls, \
            patch("chrome_devtools_cli.commands.runner.MCPClient") as client_cls:
        client_cls.return_value = mock_mcp_client
        yield Mock(transport_cls=transport_cls, client_cls=client_cls, client=mock_mcp_client)


@pytest.fixture
def mock_session():
    """Mock MCP SDK client session."""
    session = Mock()
    session.initialize = AsyncMock()
    session.call_tool = AsyncMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=None)
    return session


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
