"""
chrome-devtools CLI - one-shot command line access to the Chrome DevTools MCP server.

Each invocation spawns the companion MCP server over stdio, runs a single
browser automation tool and prints its JSON result.
"""

__version__ = "0.1.0"
__distribution__ = "chrome-devtools-cli"
