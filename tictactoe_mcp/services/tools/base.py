"""Base types and helpers for tool handlers."""

import secrets
from dataclasses import dataclass, field
from typing import Any

from tictactoe_mcp.schemas.game_engine import Mark
from tictactoe_mcp.schemas.rpc import TextContent, ToolResult
from tictactoe_mcp.services.game.engine import GameRegistry, ProcessResult

# Random bytes in a generated game ID (rendered as hex)
GAME_ID_RANDOM_BYTES = 4


@dataclass
class ToolContext:
    """Context passed to each tool handler."""

    tool_name: str
    arguments: dict[str, Any]
    registry: GameRegistry
    game_id_prefix: str = "game-"


@dataclass
class ToolParam:
    """One string argument in a tool's input schema."""

    name: str
    description: str
    required: bool = False
    enum: list[str] = field(default_factory=list)

    def to_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "string", "description": self.description}
        if self.enum:
            schema["enum"] = list(self.enum)
        return schema


def build_input_schema(params: list[ToolParam]) -> dict[str, Any]:
    """JSON schema object for a list of string params."""
    schema: dict[str, Any] = {
        "type": "object",
        "properties": {param.name: param.to_schema() for param in params},
    }
    required = [param.name for param in params if param.required]
    if required:
        schema["required"] = required
    return schema


def text_result(text: str) -> ToolResult:
    """Build a successful ToolResult."""
    return ToolResult(content=[TextContent(text=text)], is_error=False)


def error_result(message: str) -> ToolResult:
    """Build an error ToolResult."""
    return ToolResult(content=[TextContent(text=message)], is_error=True)


def engine_error(prefix: str, result: ProcessResult) -> ToolResult:
    """Render a failed engine result as ``"<prefix>: <message>"``."""
    return error_result(f"{prefix}: {result.error_message or 'unknown error'}")


def require_string(arguments: dict[str, Any], name: str) -> tuple[str | None, ToolResult | None]:
    """Extract a required, non-empty string argument.

    Returns:
        Tuple of (value, error_result). One will be None.
    """
    value = arguments.get(name)
    if not isinstance(value, str) or not value:
        return None, error_result(f"{name} is required")
    return value, None


def optional_string(arguments: dict[str, Any], name: str) -> str | None:
    """Return a string argument if present and non-empty, else None."""
    value = arguments.get(name)
    if isinstance(value, str) and value:
        return value
    return None


def parse_player(value: str) -> tuple[Mark | None, ToolResult | None]:
    """Convert a player argument to a Mark, accepting either case.

    Returns:
        Tuple of (mark, error_result). One will be None.
    """
    normalized = value.upper()
    if normalized == Mark.X.value:
        return Mark.X, None
    if normalized == Mark.O.value:
        return Mark.O, None
    return None, error_result("Player must be 'X' or 'O'")


def generate_game_id(prefix: str = "game-") -> str:
    """Short random game ID, e.g. ``game-1a2b3c4d``."""
    return prefix + secrets.token_hex(GAME_ID_RANDOM_BYTES)
