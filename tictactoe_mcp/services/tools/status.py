"""Handlers for read-only game inspection tools."""

from tictactoe_mcp.schemas.game_engine import GameStatus
from tictactoe_mcp.schemas.rpc import ToolName, ToolResult
from tictactoe_mcp.services.game.engine import describe_position

from . import tool
from .base import ToolContext, ToolParam, engine_error, require_string, text_result


@tool(
    ToolName.GET_BOARD,
    "Get the current board state",
    [ToolParam("game_id", "ID of the game to get board state for", required=True)],
)
async def handle_get_board(ctx: ToolContext) -> ToolResult:
    game_id, arg_error = require_string(ctx.arguments, "game_id")
    if arg_error:
        return arg_error

    result = ctx.registry.get(game_id)
    if not result.success or result.value is None:
        return engine_error("Game not found", result)

    record = result.value
    return text_result(
        f"Game ID: {record.game_id}\n"
        f"Current board:\n{record.board.render()}\n"
        f"Current player: {record.current_player.value}\n"
        f"Move count: {record.move_count}"
    )


@tool(
    ToolName.GET_STATUS,
    "Get the current game status and winner",
    [ToolParam("game_id", "ID of the game to get status for", required=True)],
)
async def handle_get_status(ctx: ToolContext) -> ToolResult:
    game_id, arg_error = require_string(ctx.arguments, "game_id")
    if arg_error:
        return arg_error

    result = ctx.registry.get(game_id)
    if not result.success or result.value is None:
        return engine_error("Game not found", result)

    record = result.value
    if record.status == GameStatus.WON:
        text = (
            "Game Status: Completed\n"
            f"Winner: {record.winner.value}\n"
            f"Total moves: {record.move_count}"
        )
    elif record.status == GameStatus.DRAW:
        text = f"Game Status: Draw\nTotal moves: {record.move_count}"
    else:
        text = (
            "Game Status: Ongoing\n"
            f"Current player: {record.current_player.value}\n"
            f"Move count: {record.move_count}"
        )
    return text_result(text)


@tool(
    ToolName.ANALYZE_POSITION,
    "Analyze the current game position",
    [ToolParam("game_id", "ID of the game to analyze", required=True)],
)
async def handle_analyze_position(ctx: ToolContext) -> ToolResult:
    """Summarize the position and show the board.

    Analysis and board come from a single snapshot so they always agree.
    """
    game_id, arg_error = require_string(ctx.arguments, "game_id")
    if arg_error:
        return arg_error

    result = ctx.registry.get(game_id)
    if not result.success or result.value is None:
        return engine_error("Analysis failed", result)

    record = result.value
    return text_result(
        f"Position Analysis for Game {game_id}:\n"
        f"{describe_position(record)}\n\n"
        f"Current board:\n{record.board.render()}"
    )
