"""Handlers for move tools."""

import logging

from tictactoe_mcp.schemas.game_engine import GameStatus, Mark
from tictactoe_mcp.schemas.rpc import ToolName, ToolResult
from tictactoe_mcp.services.game.engine import (
    ALL_POSITIONS,
    InvalidPositionError,
    format_position,
    parse_position,
)

from . import tool
from .base import (
    ToolContext,
    ToolParam,
    engine_error,
    error_result,
    parse_player,
    require_string,
    text_result,
)

logger = logging.getLogger(__name__)


@tool(
    ToolName.MAKE_MOVE,
    "Make a move on the tic-tac-toe board",
    [
        ToolParam("game_id", "ID of the game to make a move in", required=True),
        ToolParam(
            "position",
            "Position to place mark (A1-C3 format)",
            required=True,
            enum=ALL_POSITIONS,
        ),
        ToolParam(
            "player",
            "Player making the move",
            required=True,
            enum=[Mark.X.value, Mark.O.value],
        ),
    ],
)
async def handle_make_move(ctx: ToolContext) -> ToolResult:
    """Handle make_move by applying the move through the game registry.

    Flow:
    1. Extract required arguments
    2. Parse position and player
    3. Apply the move
    4. Render the updated board and the game outcome
    """
    game_id, arg_error = require_string(ctx.arguments, "game_id")
    if arg_error:
        return arg_error
    position_text, arg_error = require_string(ctx.arguments, "position")
    if arg_error:
        return arg_error
    player_text, arg_error = require_string(ctx.arguments, "player")
    if arg_error:
        return arg_error

    try:
        coord = parse_position(position_text)
    except InvalidPositionError as e:
        return error_result(f"Invalid position: {e.message}")

    player, player_error = parse_player(player_text)
    if player_error:
        return player_error

    result = ctx.registry.apply_move(game_id, coord, player)
    if not result.success or result.value is None:
        logger.info(
            "make_move failed for game %s: %s - %s",
            game_id,
            result.error_code,
            result.error_message,
        )
        return engine_error("Move failed", result)

    record = result.value
    response = (
        f"Move successful: {player.value} placed {player.value} at {position_text}\n\n"
        f"Updated board:\n{record.board.render()}"
    )

    if record.status == GameStatus.WON:
        response += f"\n🎉 Game Over! {record.winner.value} wins!"
    elif record.status == GameStatus.DRAW:
        response += "\nGame Over! It's a draw!"
    else:
        response += f"\nNext player: {record.current_player.value}"

    return text_result(response)


@tool(
    ToolName.GET_AVAILABLE_MOVES,
    "Get all available/valid moves for current player",
    [ToolParam("game_id", "ID of the game to get available moves for", required=True)],
)
async def handle_get_available_moves(ctx: ToolContext) -> ToolResult:
    game_id, arg_error = require_string(ctx.arguments, "game_id")
    if arg_error:
        return arg_error

    result = ctx.registry.available_moves(game_id)
    if not result.success or result.value is None:
        return engine_error("Failed to get moves", result)

    moves = result.value
    if not moves:
        return text_result("No available moves (game is over)")

    positions = ", ".join(format_position(coord) for coord in moves)
    return text_result(f"Available moves ({len(moves)}): {positions}")
