"""Handlers for game lifecycle tools: new, reset, delete, list."""

import logging

from tictactoe_mcp.schemas.rpc import ToolName, ToolResult

from . import tool
from .base import (
    ToolContext,
    ToolParam,
    engine_error,
    generate_game_id,
    optional_string,
    require_string,
    text_result,
)

logger = logging.getLogger(__name__)


@tool(
    ToolName.NEW_GAME,
    "Create a new tic-tac-toe game",
    [
        ToolParam(
            "game_id",
            "Optional game ID. If not provided, a random ID will be generated",
        ),
    ],
)
async def handle_new_game(ctx: ToolContext) -> ToolResult:
    """Create a game under the given ID, or a generated one.

    An existing game with the same ID is replaced.
    """
    game_id = optional_string(ctx.arguments, "game_id") or generate_game_id(ctx.game_id_prefix)

    record = ctx.registry.create(game_id)

    return text_result(
        f"New game created with ID: {record.game_id}\n"
        f"Starting player: {record.current_player.value}\n"
        f"Initial board:\n{record.board.render()}"
    )


@tool(
    ToolName.RESET_GAME,
    "Reset an existing game to initial state",
    [ToolParam("game_id", "ID of the game to reset", required=True)],
)
async def handle_reset_game(ctx: ToolContext) -> ToolResult:
    game_id, arg_error = require_string(ctx.arguments, "game_id")
    if arg_error:
        return arg_error

    result = ctx.registry.reset(game_id)
    if not result.success or result.value is None:
        return engine_error("Reset failed", result)

    record = result.value
    return text_result(
        f"Game {record.game_id} has been reset\n"
        f"Starting player: {record.current_player.value}\n"
        f"Board:\n{record.board.render()}"
    )


@tool(
    ToolName.DELETE_GAME,
    "Delete a game and free its ID",
    [ToolParam("game_id", "ID of the game to delete", required=True)],
)
async def handle_delete_game(ctx: ToolContext) -> ToolResult:
    game_id, arg_error = require_string(ctx.arguments, "game_id")
    if arg_error:
        return arg_error

    result = ctx.registry.delete(game_id)
    if not result.success:
        return engine_error("Delete failed", result)

    return text_result(f"Game {game_id} has been deleted")


@tool(ToolName.LIST_GAMES, "List all active game IDs")
async def handle_list_games(ctx: ToolContext) -> ToolResult:
    game_ids = ctx.registry.list_ids()

    if not game_ids:
        return text_result("No active games")

    return text_result(f"Active games ({len(game_ids)}): {', '.join(game_ids)}")
