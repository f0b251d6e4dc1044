"""Position codec: ``A1``-``C3`` notation <-> zero-based Coordinate.

The letter selects the column and the digit selects the row, so ``C1`` is
row 0, column 2. Parsing is case-sensitive; only uppercase letters are
accepted.
"""

import logging

from tictactoe_mcp.schemas.game_engine import BOARD_SIZE, Coordinate, GameErrorCode

logger = logging.getLogger(__name__)

INVALID_POSITION_TEXT = "Invalid"

_FIRST_COLUMN = "A"
_FIRST_ROW = "1"


class InvalidPositionError(ValueError):
    """Raised when a position string is not one of A1-C3."""

    error_code = GameErrorCode.INVALID_POSITION

    def __init__(self, position: str, message: str):
        super().__init__(message)
        self.position = position
        self.message = message


def parse_position(text: str) -> Coordinate:
    """Convert A1-C3 notation to a Coordinate.

    Args:
        text: Two characters, a column letter followed by a row digit.

    Returns:
        The matching in-range Coordinate.

    Raises:
        InvalidPositionError: If the text has the wrong length or names a
            cell outside the board.
    """
    if not isinstance(text, str) or len(text) != 2:
        logger.debug("Rejecting position with bad length: %r", text)
        raise InvalidPositionError(str(text), "position must be 2 characters (e.g., A1)")

    col = ord(text[0]) - ord(_FIRST_COLUMN)
    row = ord(text[1]) - ord(_FIRST_ROW)

    if not (0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE):
        logger.debug("Rejecting out-of-range position: %r", text)
        raise InvalidPositionError(text, "position must be A1-C3")

    return Coordinate(row=row, col=col)


def format_position(coord: Coordinate) -> str:
    """Render a Coordinate as A1-C3 notation, or ``"Invalid"`` if out of range."""
    if not coord.in_bounds:
        return INVALID_POSITION_TEXT
    return f"{chr(ord(_FIRST_COLUMN) + coord.col)}{chr(ord(_FIRST_ROW) + coord.row)}"


# Every legal position in row-major order
ALL_POSITIONS: list[str] = [
    format_position(Coordinate(row=row, col=col))
    for row in range(BOARD_SIZE)
    for col in range(BOARD_SIZE)
]
