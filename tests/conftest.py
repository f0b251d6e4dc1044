"""Shared fixtures for engine, tool and transport tests."""

import asyncio
from typing import Any

import pytest

from tictactoe_mcp.config import Settings
from tictactoe_mcp.schemas.game_engine import GameRecord, Mark
from tictactoe_mcp.schemas.rpc import ToolResult
from tictactoe_mcp.server import TicTacToeServer
from tictactoe_mcp.services.game.engine import GameRegistry, ProcessResult, parse_position
from tictactoe_mcp.services.tools import ToolContext, dispatch

GAME_ID = "test-game"

# X completes row 1 (A1, B1, C1) on the fifth move
ROW_WIN_MOVES: list[tuple[str, Mark]] = [
    ("A1", Mark.X),
    ("A2", Mark.O),
    ("B1", Mark.X),
    ("B2", Mark.O),
    ("C1", Mark.X),
]

# Final board:
# X O X
# O O X
# X X O
DRAW_MOVES: list[tuple[str, Mark]] = [
    ("A1", Mark.X),
    ("A2", Mark.O),
    ("A3", Mark.X),
    ("B1", Mark.O),
    ("C1", Mark.X),
    ("B2", Mark.O),
    ("B3", Mark.X),
    ("C3", Mark.O),
    ("C2", Mark.X),
]


def play(registry: GameRegistry, game_id: str, moves: list[tuple[str, Mark]]) -> list[ProcessResult]:
    """Apply moves in order and return every result."""
    return [registry.apply_move(game_id, parse_position(pos), mark) for pos, mark in moves]


def play_all(registry: GameRegistry, game_id: str, moves: list[tuple[str, Mark]]) -> GameRecord:
    """Apply moves that are all expected to succeed; return the final record."""
    results = play(registry, game_id, moves)
    for (pos, mark), result in zip(moves, results):
        assert result.success, f"{mark.value} at {pos} failed: {result.error_message}"
    return results[-1].value


def call_tool(server: TicTacToeServer, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
    """Run a tool handler synchronously against the server's registry."""
    ctx = ToolContext(
        tool_name=name,
        arguments=arguments or {},
        registry=server.registry,
        game_id_prefix=server.settings.GAME_ID_PREFIX,
    )
    result = asyncio.run(dispatch(ctx))
    assert result is not None, f"tool {name} is not registered"
    return result


def rpc(server: TicTacToeServer, message: Any) -> Any:
    """Send one decoded JSON-RPC message through the protocol session."""
    return asyncio.run(server.handle_message(message))


def tool_call_message(name: str, arguments: dict[str, Any] | None = None, request_id: int = 1) -> dict:
    params: dict[str, Any] = {"name": name}
    if arguments is not None:
        params["arguments"] = arguments
    return {"jsonrpc": "2.0", "id": request_id, "method": "tools/call", "params": params}


@pytest.fixture
def registry() -> GameRegistry:
    """Empty game registry."""
    return GameRegistry()


@pytest.fixture
def fresh_game(registry: GameRegistry) -> str:
    """Registry holding one new game; returns its ID."""
    registry.create(GAME_ID)
    return GAME_ID


@pytest.fixture
def won_game(registry: GameRegistry, fresh_game: str) -> str:
    """Game X has won by completing row 1."""
    play_all(registry, fresh_game, ROW_WIN_MOVES)
    return fresh_game


@pytest.fixture
def drawn_game(registry: GameRegistry, fresh_game: str) -> str:
    """Game that ended in a draw."""
    play_all(registry, fresh_game, DRAW_MOVES)
    return fresh_game


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def server(settings: Settings, registry: GameRegistry) -> TicTacToeServer:
    """Protocol server backed by the shared registry fixture."""
    return TicTacToeServer(settings=settings, registry=registry)
