"""Game registry: the authoritative store of live games and the move rules.

This module provides the primary interface for the tool adapter:
- GameRegistry.create/get/reset/delete/list_ids manage game records
- GameRegistry.apply_move validates and applies a single placement
- GameRegistry.available_moves/analyze are read-only derived views

Mutations hold the write lock; reads hold the read lock. Records are
immutable, so a record returned to a caller is a consistent snapshot.
"""

import logging

from tictactoe_mcp.schemas.game_engine import (
    Coordinate,
    GameRecord,
    GameStatus,
    Mark,
)

from .locking import ReadWriteLock
from .rules import evaluate_outcome
from .validation import ProcessResult, game_not_found, validate_move

logger = logging.getLogger(__name__)


def list_available_moves(record: GameRecord) -> list[Coordinate]:
    """Empty cells in row-major order, or nothing once the game is over."""
    if record.is_over:
        return []
    return record.board.empty_cells()


def describe_position(record: GameRecord) -> str:
    """One-line summary of a game: outcome if finished, otherwise whose turn."""
    if record.status == GameStatus.WON:
        return f"Game over: {record.winner.value} wins!"
    if record.status == GameStatus.DRAW:
        return "Game over: It's a draw!"
    return (
        f"Current player: {record.current_player.value}, "
        f"Available moves: {len(list_available_moves(record))}, "
        f"Move count: {record.move_count}"
    )


def apply_placement(record: GameRecord, coord: Coordinate, mark: Mark) -> GameRecord:
    """Place ``mark`` and compute the next record.

    Assumes the move has already passed validate_move().
    """
    board = record.board.place(coord, mark)
    status = evaluate_outcome(board, mark)

    update: dict = {
        "board": board,
        "move_count": record.move_count + 1,
        "status": status,
    }
    if status == GameStatus.WON:
        update["winner"] = mark
    elif status == GameStatus.ONGOING:
        update["current_player"] = record.next_player()

    return record.model_copy(update=update)


class GameRegistry:
    """Keyed collection of game records guarded by one reader/writer lock."""

    def __init__(self) -> None:
        self._games: dict[str, GameRecord] = {}
        self._lock = ReadWriteLock()

    def create(self, game_id: str) -> GameRecord:
        """Create a new game, replacing any existing game with the same ID."""
        record = GameRecord.new(game_id)
        with self._lock.write_locked():
            replaced = game_id in self._games
            self._games[game_id] = record
        if replaced:
            logger.info("Game %s re-created, previous game discarded", game_id)
        else:
            logger.info("Game %s created", game_id)
        return record

    def get(self, game_id: str) -> ProcessResult[GameRecord]:
        with self._lock.read_locked():
            record = self._games.get(game_id)
        if record is None:
            logger.debug("Lookup failed: game=%s", game_id)
            return game_not_found(game_id)
        return ProcessResult.ok(record)

    def apply_move(self, game_id: str, coord: Coordinate, mark: Mark) -> ProcessResult[GameRecord]:
        """Validate and apply a move.

        Args:
            game_id: Game to move in.
            coord: Target cell.
            mark: The mark being placed; must match the current player.

        Returns:
            ProcessResult containing:
            - success: Whether the move was applied
            - value: The updated record (if successful)
            - error_code/error_message: Error details (if failed)
        """
        logger.info(
            "Processing move: game=%s, mark=%s, row=%d, col=%d",
            game_id,
            mark.value,
            coord.row,
            coord.col,
        )

        with self._lock.write_locked():
            record = self._games.get(game_id)
            if record is None:
                result: ProcessResult[GameRecord] = game_not_found(game_id)
            else:
                validation = validate_move(record, coord, mark)
                if validation.is_valid:
                    record = apply_placement(record, coord, mark)
                    self._games[game_id] = record
                    result = ProcessResult.ok(record)
                else:
                    result = ProcessResult.failure(
                        validation.error_code,
                        validation.error_message or "invalid move",
                    )

        if not result.success:
            logger.warning(
                "Move rejected: game=%s, code=%s, message=%s",
                game_id,
                result.error_code,
                result.error_message,
            )
            return result

        logger.info(
            "Move applied: game=%s, status=%s, move_count=%d",
            game_id,
            record.status.value,
            record.move_count,
        )
        if record.status == GameStatus.WON:
            logger.info("Winner detected: game=%s, winner=%s", game_id, record.winner.value)
        return result

    def reset(self, game_id: str) -> ProcessResult[GameRecord]:
        """Return a game to its creation-time state, keeping its ID."""
        with self._lock.write_locked():
            if game_id not in self._games:
                result: ProcessResult[GameRecord] = game_not_found(game_id)
            else:
                record = GameRecord.new(game_id)
                self._games[game_id] = record
                result = ProcessResult.ok(record)

        if result.success:
            logger.info("Game %s reset", game_id)
        else:
            logger.warning("Reset failed: game=%s not found", game_id)
        return result

    def delete(self, game_id: str) -> ProcessResult[None]:
        with self._lock.write_locked():
            removed = self._games.pop(game_id, None)

        if removed is None:
            logger.warning("Delete failed: game=%s not found", game_id)
            return game_not_found(game_id)
        logger.info("Game %s deleted", game_id)
        return ProcessResult.ok(None)

    def list_ids(self) -> list[str]:
        with self._lock.read_locked():
            return list(self._games)

    def available_moves(self, game_id: str) -> ProcessResult[list[Coordinate]]:
        """Empty cells in row-major order; empty list if the game is over."""
        result = self.get(game_id)
        if not result.success or result.value is None:
            return result  # type: ignore[return-value]
        return ProcessResult.ok(list_available_moves(result.value))

    def analyze(self, game_id: str) -> ProcessResult[str]:
        """Human-readable summary of a game's position."""
        result = self.get(game_id)
        if not result.success or result.value is None:
            return result  # type: ignore[return-value]
        return ProcessResult.ok(describe_position(result.value))

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._games)
