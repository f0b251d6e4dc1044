"""Game engine module - tic-tac-toe rules and the game registry.

This module provides the core game engine with:
- Position codec for A1-C3 notation
- Win/draw detection
- ProcessResult pattern for error handling
- GameRegistry holding every live game behind a reader/writer lock

Usage:
    from tictactoe_mcp.services.game.engine import (
        GameRegistry,
        Mark,
        parse_position,
    )

    registry = GameRegistry()
    registry.create("demo")
    result = registry.apply_move("demo", parse_position("B2"), Mark.X)

    if result.success:
        record = result.value
    else:
        print(f"Error: {result.error_code} - {result.error_message}")
"""

from tictactoe_mcp.schemas.game_engine import (
    Board,
    Coordinate,
    GameErrorCode,
    GameRecord,
    GameStatus,
    Mark,
)

# Locking
from .locking import ReadWriteLock

# Position codec
from .position import ALL_POSITIONS, InvalidPositionError, format_position, parse_position

# Registry
from .registry import GameRegistry, describe_position, list_available_moves

# Rules
from .rules import WINNING_LINES, check_win, evaluate_outcome

# Result types
from .validation import ProcessResult, ValidationResult, validate_move

__all__ = [
    # Data model
    "Board",
    "Coordinate",
    "GameErrorCode",
    "GameRecord",
    "GameStatus",
    "Mark",
    # Position codec
    "ALL_POSITIONS",
    "InvalidPositionError",
    "format_position",
    "parse_position",
    # Rules
    "WINNING_LINES",
    "check_win",
    "evaluate_outcome",
    # Validation
    "ProcessResult",
    "ValidationResult",
    "validate_move",
    # Registry
    "GameRegistry",
    "ReadWriteLock",
    "describe_position",
    "list_available_moves",
]
