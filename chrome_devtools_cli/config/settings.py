"""
Runtime settings for the chrome-devtools CLI.

Companion server settings come from an optional YAML file, falling back
to the built-in defaults for anything it does not set.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from .constants import DEFAULT_MCP_SERVER, HEADLESS_SERVER_ARG

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CHROME_DEVTOOLS_CLI_CONFIG"
LOG_LEVEL_ENV_VAR = "CHROME_DEVTOOLS_CLI_LOG_LEVEL"
DEFAULT_CONFIG_PATH = Path("~/.config/chrome-devtools-cli/config.yaml")
DEFAULT_LOG_LEVEL = "WARNING"


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be used."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


@dataclass
class ServerConfig:
    """Launch configuration for the companion MCP server."""
    name: str
    command: str
    args: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)
    working_dir: Optional[str] = None

    def launch_args(self, headless: bool = False) -> List[str]:
        """Argument list for the server process, with the headless marker when requested."""
        if headless:
            return [*self.args, HEADLESS_SERVER_ARG]
        return list(self.args)

    def launch_env(self) -> Optional[Dict[str, str]]:
        # None lets the SDK pass its default safe environment through
        return dict(self.env) if self.env else None


def default_server_config() -> ServerConfig:
    return ServerConfig(
        name=DEFAULT_MCP_SERVER["name"],
        command=DEFAULT_MCP_SERVER["command"],
        args=list(DEFAULT_MCP_SERVER["args"]),
    )


def get_config_path() -> Path:
    return Path(os.getenv(CONFIG_ENV_VAR, str(DEFAULT_CONFIG_PATH))).expanduser()


def get_log_level() -> str:
    return os.getenv(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()


def load_server_config(config_path: Optional[Path] = None) -> ServerConfig:
    """
    Load the companion server configuration.

    Args:
        config_path: YAML file to read; defaults to the path from the environment

    Returns:
        Server configuration with file values layered over the defaults

    Raises:
        ConfigurationError: If the file exists but is not valid
    """
    config = default_server_config()
    config_file = Path(config_path) if config_path else get_config_path()

    if not config_file.exists():
        logger.debug(f"Configuration file not found: {config_file}")
        return config

    try:
        with open(config_file, 'r') as f:
            config_data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load configuration from {config_file}: {e}")

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration in {config_file} must be a mapping")

    server_data = config_data.get("server", {}) or {}
    if not isinstance(server_data, dict):
        raise ConfigurationError(f"'server' section in {config_file} must be a mapping")

    config.name = server_data.get("name", config.name)
    config.command = server_data.get("command", config.command)
    args = server_data.get("args", config.args)
    if not isinstance(args, list):
        raise ConfigurationError(f"'server.args' in {config_file} must be a list")
    env = server_data.get("env") or {}
    if not isinstance(env, dict):
        raise ConfigurationError(f"'server.env' in {config_file} must be a mapping")

    config.args = [str(arg) for arg in args]
    config.env = {str(k): str(v) for k, v in env.items()}
    config.working_dir = server_data.get("working_dir", config.working_dir)

    logger.info(f"Loaded server configuration from {config_file}")
    return config
