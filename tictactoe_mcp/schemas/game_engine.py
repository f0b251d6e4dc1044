from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

BOARD_SIZE = 3
EMPTY_CELL_SYMBOL = "·"


# Cell contents and player symbols
class Mark(str, Enum):
    EMPTY = ""
    X = "X"
    O = "O"

    def opponent(self) -> "Mark":
        """Return the other player's mark."""
        if self is Mark.X:
            return Mark.O
        if self is Mark.O:
            return Mark.X
        raise ValueError("EMPTY has no opponent")


# Game lifecycle
class GameStatus(str, Enum):
    ONGOING = "ongoing"
    WON = "won"
    DRAW = "draw"


class Coordinate(BaseModel):
    """Zero-based (row, col) cell address.

    Range is not enforced here; the position codec only ever produces
    in-range coordinates and the engine rejects anything else.
    """

    model_config = ConfigDict(frozen=True)

    row: int
    col: int

    @property
    def in_bounds(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE


Row = tuple[Mark, Mark, Mark]


def _empty_cells() -> tuple[Row, Row, Row]:
    return tuple((Mark.EMPTY,) * BOARD_SIZE for _ in range(BOARD_SIZE))  # type: ignore[return-value]


class Board(BaseModel):
    """Immutable 3x3 grid. Placing a mark returns a new board."""

    model_config = ConfigDict(frozen=True)

    cells: tuple[Row, Row, Row] = Field(default_factory=_empty_cells)

    def get(self, coord: Coordinate) -> Mark:
        return self.cells[coord.row][coord.col]

    def is_empty(self, coord: Coordinate) -> bool:
        return self.get(coord) == Mark.EMPTY

    def is_full(self) -> bool:
        return all(cell != Mark.EMPTY for row in self.cells for cell in row)

    def count(self, mark: Mark) -> int:
        return sum(1 for row in self.cells for cell in row if cell == mark)

    def filled_count(self) -> int:
        return BOARD_SIZE * BOARD_SIZE - self.count(Mark.EMPTY)

    def empty_cells(self) -> list[Coordinate]:
        """Empty cells in row-major order."""
        return [
            Coordinate(row=row, col=col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.cells[row][col] == Mark.EMPTY
        ]

    def place(self, coord: Coordinate, mark: Mark) -> "Board":
        """Return a copy of the board with ``mark`` at ``coord``.

        Callers are expected to have validated the cell is empty and in range.
        """
        rows = [list(row) for row in self.cells]
        rows[coord.row][coord.col] = mark
        return Board(cells=tuple(tuple(row) for row in rows))

    def render(self) -> str:
        """Render the board with column letters and row numbers.

        Example:
              A B C
            1 X · ·
            2 · O ·
            3 · · ·
        """
        header = "  " + " ".join(chr(ord("A") + col) for col in range(BOARD_SIZE))
        lines = [header]
        for row_idx, row in enumerate(self.cells):
            symbols = [cell.value or EMPTY_CELL_SYMBOL for cell in row]
            lines.append(f"{row_idx + 1} " + " ".join(symbols))
        return "\n".join(lines) + "\n"


# Game record kept in the registry
class GameRecord(BaseModel):
    """Complete state of one game.

    Records are immutable snapshots; every transition produces a new record
    via ``model_copy`` and the registry swaps it in.
    """

    model_config = ConfigDict(frozen=True)

    game_id: str
    board: Board = Field(default_factory=Board)
    current_player: Mark = Mark.X  # X always goes first
    status: GameStatus = GameStatus.ONGOING
    winner: Mark = Mark.EMPTY  # Only meaningful when status is WON
    move_count: int = Field(0, ge=0)

    @field_validator("current_player")
    @classmethod
    def validate_current_player(cls, v: Mark) -> Mark:
        if v == Mark.EMPTY:
            raise ValueError("current_player must be X or O")
        return v

    @classmethod
    def new(cls, game_id: str) -> "GameRecord":
        """Fresh game: empty board, X to move, no moves made."""
        return cls(game_id=game_id)

    @property
    def is_over(self) -> bool:
        return self.status != GameStatus.ONGOING

    def next_player(self) -> Mark:
        return self.current_player.opponent()


# Error codes returned by the engine and the position codec
class GameErrorCode(str, Enum):
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    GAME_OVER = "GAME_OVER"
    WRONG_TURN = "WRONG_TURN"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    CELL_OCCUPIED = "CELL_OCCUPIED"
    INVALID_POSITION = "INVALID_POSITION"
