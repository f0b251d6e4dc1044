"""Validation layer for moves and the ProcessResult pattern.

Separates validation from processing logic:
- validate_move() checks if a move is legal given the current record
- ProcessResult replaces exceptions for control flow
"""

import logging
from dataclasses import dataclass

from tictactoe_mcp.schemas.game_engine import Coordinate, GameErrorCode, GameRecord, Mark

from .position import format_position

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult[T]:
    """Result of an engine operation.

    Replaces exceptions for control flow, providing explicit success/failure
    with error codes the protocol adapter turns into caller-visible text.
    """

    value: T | None = None
    success: bool = True
    error_code: GameErrorCode | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, value: T) -> "ProcessResult[T]":
        """Create a successful result carrying ``value``."""
        return cls(value=value, success=True)

    @classmethod
    def failure(cls, code: GameErrorCode, message: str) -> "ProcessResult[T]":
        """Create a failure result with error details."""
        return cls(
            value=None,
            success=False,
            error_code=code,
            error_message=message,
        )


@dataclass
class ValidationResult:
    """Result of validating a move before applying it."""

    is_valid: bool = True
    error_code: GameErrorCode | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(is_valid=True)

    @classmethod
    def error(cls, code: GameErrorCode, message: str) -> "ValidationResult":
        """Create a validation failure with error details."""
        return cls(
            is_valid=False,
            error_code=code,
            error_message=message,
        )


def game_not_found(game_id: str) -> ProcessResult:
    return ProcessResult.failure(
        GameErrorCode.GAME_NOT_FOUND,
        f"game with ID {game_id} not found",
    )


def validate_move(record: GameRecord, coord: Coordinate, mark: Mark) -> ValidationResult:
    """Validate a move before it is applied.

    Checks, in order:
    - Game is still ongoing
    - It's this mark's turn
    - Coordinate is on the board
    - Target cell is empty

    Args:
        record: Current game record.
        coord: Target cell.
        mark: The mark being placed.

    Returns:
        ValidationResult indicating success or failure with error details.
    """
    logger.debug(
        "Validating move: game=%s, mark=%s, row=%d, col=%d, status=%s",
        record.game_id,
        mark.value,
        coord.row,
        coord.col,
        record.status.value,
    )

    if record.is_over:
        logger.warning("Validation failed: GAME_OVER, status=%s", record.status.value)
        return ValidationResult.error(
            GameErrorCode.GAME_OVER,
            "game is already over",
        )

    if mark != record.current_player:
        logger.warning(
            "Validation failed: WRONG_TURN, current=%s, attempted=%s",
            record.current_player.value,
            mark.value,
        )
        return ValidationResult.error(
            GameErrorCode.WRONG_TURN,
            f"it's not {mark.value or 'EMPTY'}'s turn",
        )

    if not coord.in_bounds:
        logger.warning("Validation failed: OUT_OF_BOUNDS, row=%d, col=%d", coord.row, coord.col)
        return ValidationResult.error(
            GameErrorCode.OUT_OF_BOUNDS,
            f"position {format_position(coord)} is out of bounds",
        )

    if not record.board.is_empty(coord):
        logger.warning(
            "Validation failed: CELL_OCCUPIED, position=%s, occupant=%s",
            format_position(coord),
            record.board.get(coord).value,
        )
        return ValidationResult.error(
            GameErrorCode.CELL_OCCUPIED,
            f"position {format_position(coord)} is already occupied",
        )

    logger.debug("Move validated successfully")
    return ValidationResult.ok()
