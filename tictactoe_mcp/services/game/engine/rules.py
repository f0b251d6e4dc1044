"""Win and draw detection.

Only the mark that just moved is checked, so a win is always attributed to
the most recent mover.
"""

import logging

from tictactoe_mcp.schemas.game_engine import Board, Coordinate, GameStatus, Mark

logger = logging.getLogger(__name__)


def _line(*cells: tuple[int, int]) -> tuple[Coordinate, ...]:
    return tuple(Coordinate(row=row, col=col) for row, col in cells)


# All eight winning lines
WINNING_LINES: tuple[tuple[Coordinate, ...], ...] = (
    # Rows
    _line((0, 0), (0, 1), (0, 2)),
    _line((1, 0), (1, 1), (1, 2)),
    _line((2, 0), (2, 1), (2, 2)),
    # Columns
    _line((0, 0), (1, 0), (2, 0)),
    _line((0, 1), (1, 1), (2, 1)),
    _line((0, 2), (1, 2), (2, 2)),
    # Diagonals
    _line((0, 0), (1, 1), (2, 2)),
    _line((0, 2), (1, 1), (2, 0)),
)


def check_win(board: Board, mark: Mark) -> bool:
    """Return True if any line is made up entirely of ``mark``."""
    if mark == Mark.EMPTY:
        return False
    for line in WINNING_LINES:
        if all(board.get(coord) == mark for coord in line):
            logger.debug("Winning line for %s: %s", mark.value, [(c.row, c.col) for c in line])
            return True
    return False


def evaluate_outcome(board: Board, mover: Mark) -> GameStatus:
    """Classify the board right after ``mover`` placed a mark.

    Args:
        board: Board including the move just made.
        mover: The mark that made the move.

    Returns:
        WON if the mover completed a line, DRAW if the board is full
        without a win, ONGOING otherwise.
    """
    if check_win(board, mover):
        return GameStatus.WON
    if board.is_full():
        return GameStatus.DRAW
    return GameStatus.ONGOING
