"""Tests for applying moves through the registry.

Critical scenarios tested:
- A legal move places the mark, counts it and passes the turn
- GAME_OVER / WRONG_TURN / OUT_OF_BOUNDS / CELL_OCCUPIED rejections
- Rejected moves leave the game untouched
- Row, column and diagonal wins end the game on exactly the winning move
- A nine-move game without a line ends in a draw
- Move count always equals the number of marked cells
"""

import pytest

from tictactoe_mcp.schemas.game_engine import (
    Board,
    Coordinate,
    GameErrorCode,
    GameStatus,
    Mark,
)
from tictactoe_mcp.services.game.engine import GameRegistry, parse_position

from .conftest import DRAW_MOVES, GAME_ID, ROW_WIN_MOVES, play, play_all


class TestLegalMove:
    """Test a successful placement."""

    def test_move_applied(self, registry: GameRegistry, fresh_game: str):
        pos = parse_position("A1")

        result = registry.apply_move(fresh_game, pos, Mark.X)

        assert result.success
        record = result.value
        assert record.board.get(pos) == Mark.X
        assert record.current_player == Mark.O
        assert record.move_count == 1
        assert record.status == GameStatus.ONGOING

    def test_registry_holds_updated_record(self, registry: GameRegistry, fresh_game: str):
        registry.apply_move(fresh_game, parse_position("B2"), Mark.X)

        record = registry.get(fresh_game).value
        assert record.board.get(parse_position("B2")) == Mark.X
        assert record.move_count == 1

    def test_earlier_snapshot_unchanged(self, registry: GameRegistry, fresh_game: str):
        """Records handed out before a move do not see it."""
        before = registry.get(fresh_game).value

        registry.apply_move(fresh_game, parse_position("B2"), Mark.X)

        assert before.move_count == 0
        assert before.board == Board()


class TestMoveValidation:
    """Test each rejection reason."""

    def test_unknown_game(self, registry: GameRegistry):
        result = registry.apply_move("missing", parse_position("A1"), Mark.X)

        assert not result.success
        assert result.error_code == GameErrorCode.GAME_NOT_FOUND
        assert result.error_message == "game with ID missing not found"

    def test_wrong_turn_on_fresh_game(self, registry: GameRegistry, fresh_game: str):
        """O cannot open the game."""
        result = registry.apply_move(fresh_game, parse_position("A1"), Mark.O)

        assert not result.success
        assert result.error_code == GameErrorCode.WRONG_TURN
        assert result.error_message == "it's not O's turn"

    @pytest.mark.parametrize("row,col", [(3, 0), (0, 3), (-1, 1), (1, -1)])
    def test_out_of_bounds(self, registry: GameRegistry, fresh_game: str, row: int, col: int):
        result = registry.apply_move(fresh_game, Coordinate(row=row, col=col), Mark.X)

        assert not result.success
        assert result.error_code == GameErrorCode.OUT_OF_BOUNDS
        assert result.error_message == "position Invalid is out of bounds"

    def test_cell_occupied(self, registry: GameRegistry, fresh_game: str):
        pos = parse_position("A1")
        registry.apply_move(fresh_game, pos, Mark.X)

        result = registry.apply_move(fresh_game, pos, Mark.O)

        assert not result.success
        assert result.error_code == GameErrorCode.CELL_OCCUPIED
        assert result.error_message == "position A1 is already occupied"

    def test_game_over(self, registry: GameRegistry, won_game: str):
        result = registry.apply_move(won_game, parse_position("C3"), Mark.O)

        assert not result.success
        assert result.error_code == GameErrorCode.GAME_OVER
        assert result.error_message == "game is already over"

    def test_game_over_checked_before_turn(self, registry: GameRegistry, drawn_game: str):
        """A finished game reports GAME_OVER whoever tries to move."""
        for mark in (Mark.X, Mark.O):
            result = registry.apply_move(drawn_game, parse_position("A1"), mark)
            assert result.error_code == GameErrorCode.GAME_OVER

    def test_wrong_turn_checked_before_occupied(self, registry: GameRegistry, fresh_game: str):
        registry.apply_move(fresh_game, parse_position("A1"), Mark.X)

        result = registry.apply_move(fresh_game, parse_position("A1"), Mark.X)

        assert result.error_code == GameErrorCode.WRONG_TURN

    def test_rejected_move_changes_nothing(self, registry: GameRegistry, fresh_game: str):
        registry.apply_move(fresh_game, parse_position("A1"), Mark.X)
        before = registry.get(fresh_game).value

        registry.apply_move(fresh_game, parse_position("A1"), Mark.O)
        registry.apply_move(fresh_game, parse_position("B1"), Mark.X)

        assert registry.get(fresh_game).value == before


class TestWinConditions:
    """Test games ending in a win."""

    def test_row_win_on_exactly_the_completing_move(self, registry: GameRegistry, fresh_game: str):
        results = play(registry, fresh_game, ROW_WIN_MOVES)

        for result in results[:-1]:
            assert result.success
            assert result.value.status == GameStatus.ONGOING

        final = results[-1].value
        assert final.status == GameStatus.WON
        assert final.winner == Mark.X
        assert final.move_count == 5

    def test_winning_move_does_not_flip_turn(self, registry: GameRegistry, won_game: str):
        assert registry.get(won_game).value.current_player == Mark.X

    def test_column_win_for_o(self, registry: GameRegistry, fresh_game: str):
        record = play_all(
            registry,
            fresh_game,
            [
                ("A1", Mark.X),
                ("B1", Mark.O),
                ("A2", Mark.X),
                ("B2", Mark.O),
                ("C3", Mark.X),
                ("B3", Mark.O),
            ],
        )

        assert record.status == GameStatus.WON
        assert record.winner == Mark.O

    def test_diagonal_win(self, registry: GameRegistry, fresh_game: str):
        record = play_all(
            registry,
            fresh_game,
            [("A1", Mark.X), ("B1", Mark.O), ("B2", Mark.X), ("C1", Mark.O), ("C3", Mark.X)],
        )

        assert record.status == GameStatus.WON
        assert record.winner == Mark.X

    def test_anti_diagonal_win(self, registry: GameRegistry, fresh_game: str):
        record = play_all(
            registry,
            fresh_game,
            [("C1", Mark.X), ("A1", Mark.O), ("B2", Mark.X), ("A2", Mark.O), ("A3", Mark.X)],
        )

        assert record.status == GameStatus.WON
        assert record.winner == Mark.X

    def test_win_on_ninth_move_is_not_a_draw(self, registry: GameRegistry, fresh_game: str):
        record = play_all(
            registry,
            fresh_game,
            [
                ("A1", Mark.X),
                ("B1", Mark.O),
                ("C1", Mark.X),
                ("A2", Mark.O),
                ("B2", Mark.X),
                ("C2", Mark.O),
                ("B3", Mark.X),
                ("A3", Mark.O),
                ("C3", Mark.X),
            ],
        )

        assert record.board.is_full()
        assert record.status == GameStatus.WON
        assert record.winner == Mark.X


class TestDraw:
    def test_draw_after_ninth_move(self, registry: GameRegistry, fresh_game: str):
        results = play(registry, fresh_game, DRAW_MOVES)

        for result in results[:-1]:
            assert result.success
            assert result.value.status == GameStatus.ONGOING

        final = results[-1].value
        assert final.status == GameStatus.DRAW
        assert final.winner == Mark.EMPTY
        assert final.move_count == 9


class TestMoveCountInvariant:
    def test_move_count_matches_marked_cells(self, registry: GameRegistry):
        registry.create(GAME_ID)

        for result in play(registry, GAME_ID, DRAW_MOVES):
            record = result.value
            assert record.move_count == record.board.filled_count()
            assert record.board.count(Mark.X) - record.board.count(Mark.O) in (0, 1)

    def test_failed_moves_do_not_count(self, registry: GameRegistry, fresh_game: str):
        registry.apply_move(fresh_game, parse_position("A1"), Mark.O)
        registry.apply_move(fresh_game, parse_position("A1"), Mark.X)
        registry.apply_move(fresh_game, parse_position("A1"), Mark.O)

        record = registry.get(fresh_game).value
        assert record.move_count == 1 == record.board.filled_count()
