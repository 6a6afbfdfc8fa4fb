"""
Request models for command dispatch.
"""

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError


class ArgumentParseError(Exception):
    """Raised when the command argument payload is not a JSON object."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ToolCall(BaseModel):
    """A single tools/call request against the companion server."""
    name: str = Field(..., description="Tool name")
    arguments: Dict[str, Any] = Field(default_factory=dict, description="Tool arguments")

    @classmethod
    def from_cli(cls, name: str, raw_arguments: Optional[str]) -> "ToolCall":
        """
        Build a tool call from the raw command-line argument string.

        Absent, empty and whitespace-only strings mean no arguments.

        Raises:
            ArgumentParseError: If the string is not a JSON object
        """
        if raw_arguments is None or not raw_arguments.strip():
            return cls(name=name)

        try:
            parsed = json.loads(raw_arguments)
        except json.JSONDecodeError as e:
            raise ArgumentParseError(f"Invalid JSON arguments: {e}")

        try:
            return cls(name=name, arguments=parsed)
        except ValidationError:
            raise ArgumentParseError(
                f"Arguments must be a JSON object, got {type(parsed).__name__}"
            )
