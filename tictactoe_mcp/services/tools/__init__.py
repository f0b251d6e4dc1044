"""Tool handler registry and dispatcher."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from tictactoe_mcp.schemas.rpc import ToolDefinition, ToolName, ToolResult

from .base import ToolContext, ToolParam, build_input_schema, error_result

logger = logging.getLogger(__name__)

# Type alias for handler functions
ToolFunc = Callable[[ToolContext], Awaitable[ToolResult]]


@dataclass
class RegisteredTool:
    """A tool handler together with the metadata advertised in tools/list."""

    name: ToolName
    description: str
    params: list[ToolParam]
    func: ToolFunc

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name.value,
            description=self.description,
            input_schema=build_input_schema(self.params),
        )


# Tool registry: maps tool name to its handler
_tools: dict[str, RegisteredTool] = {}


def tool(
    name: ToolName,
    description: str,
    params: list[ToolParam] | None = None,
) -> Callable[[ToolFunc], ToolFunc]:
    """Decorator to register a handler for a tool.

    Usage:
        @tool(ToolName.LIST_GAMES, "List all active game IDs")
        async def handle_list_games(ctx: ToolContext) -> ToolResult:
            ...
    """

    def decorator(func: ToolFunc) -> ToolFunc:
        if name.value in _tools:
            logger.warning(
                "Overwriting existing handler for %s",
                name.value,
            )
        _tools[name.value] = RegisteredTool(
            name=name,
            description=description,
            params=params or [],
            func=func,
        )
        logger.debug("Registered tool %s: %s", name.value, func.__name__)
        return func

    return decorator


def has_tool(name: str) -> bool:
    return name in _tools


def list_tool_definitions() -> list[ToolDefinition]:
    """Definitions for every registered tool, in registration order."""
    return [registered.definition() for registered in _tools.values()]


async def dispatch(ctx: ToolContext) -> ToolResult | None:
    """Dispatch a tool call to its registered handler.

    Unexpected exceptions raised by a handler are logged and reported to
    the caller as a tool error so one bad call never takes the server down.

    Args:
        ctx: The tool context containing the arguments and the registry.

    Returns:
        ToolResult from the handler, or None if no handler is registered.
    """
    registered = _tools.get(ctx.tool_name)
    if registered is None:
        logger.debug("No handler registered for tool %s", ctx.tool_name)
        return None

    try:
        return await registered.func(ctx)
    except Exception:
        logger.exception("Tool %s failed with arguments %s", ctx.tool_name, ctx.arguments)
        return error_result(f"Internal error while running {ctx.tool_name}")


# Import handlers to trigger registration
from . import games  # noqa: E402, F401
from . import moves  # noqa: E402, F401
from . import status  # noqa: E402, F401

__all__ = [
    "RegisteredTool",
    "ToolContext",
    "ToolParam",
    "ToolResult",
    "dispatch",
    "has_tool",
    "list_tool_definitions",
    "tool",
]
