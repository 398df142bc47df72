"""Unit tests for /src/chess/board.py"""

from typing import Callable, Literal

import pytest

from src.chess.board import STARTING_POSITION, Board
from src.chess.notation import square_from_notation
from src.chess.pieces import PIECE_TO_FEN, Piece
from src.chess.square import Square
from src.core.exceptions import InvariantViolationError
from src.core.shared_types import Color, PieceType

EMPTY_FEN = "/".join(["8"] * 8)
PieceColors = Literal[Color.WHITE, Color.BLACK]


@pytest.fixture
def board_with_single_piece() -> Callable[[PieceType, PieceColors, str], Board]:
    """Call the inner function that will be returned with the desired piece type, color, and square"""

    def _create_board(
        piece_type: PieceType,
        color: PieceColors,
        square_name: str = "d4",
    ) -> Board:
        if color == Color.WHITE:
            fen_char = PIECE_TO_FEN[piece_type].upper()
        else:
            fen_char = PIECE_TO_FEN[piece_type].lower()

        file_idx = ord(square_name[0]) - ord("a")
        rank_idx = 8 - int(square_name[1])

        fen_rows = ["8"] * 8
        before = str(file_idx) if file_idx > 0 else ""
        after = str(7 - file_idx) if file_idx < 7 else ""
        fen_rows[rank_idx] = f"{before}{fen_char}{after}"
        return Board.from_fen("/".join(fen_rows))

    return _create_board


def test_starting_position() -> None:
    board = Board.starting_position()
    assert board.piece(square_from_notation("e1")) == Piece(PieceType.KING, Color.WHITE)
    assert board.piece(square_from_notation("d8")) == Piece(PieceType.QUEEN, Color.BLACK)
    assert board.piece(square_from_notation("a7")) == Piece(PieceType.PAWN, Color.BLACK)
    assert board.is_empty(square_from_notation("e4"))


def test_fen_round_trip_of_starting_position() -> None:
    assert Board.starting_position().to_fen() == STARTING_POSITION


@pytest.mark.parametrize(
    "piece_type, color, square_name",
    [
        (PieceType.KNIGHT, Color.WHITE, "a1"),
        (PieceType.ROOK, Color.BLACK, "h8"),
        (PieceType.PAWN, Color.WHITE, "d4"),
    ],
)
def test_single_piece_placement(
    board_with_single_piece: Callable[[PieceType, PieceColors, str], Board],
    piece_type: PieceType,
    color: PieceColors,
    square_name: str,
) -> None:
    board = board_with_single_piece(piece_type, color, square_name)
    square = square_from_notation(square_name)
    assert board.piece(square) == Piece(piece_type, color)
    assert board.locate_pieces(Piece(piece_type, color)) == [square]


def test_wrong_number_of_ranks() -> None:
    with pytest.raises(InvariantViolationError):
        Board.from_fen("8/8/8/8/8/8/8")


def test_move_piece_returns_captured_piece() -> None:
    board = Board.from_fen("8/8/8/3p4/4P3/8/8/8")
    e4 = square_from_notation("e4")
    d5 = square_from_notation("d5")

    captured = board.move_piece(e4, d5)
    assert captured == Piece(PieceType.PAWN, Color.BLACK)
    assert board.piece(d5) == Piece(PieceType.PAWN, Color.WHITE)
    assert board.is_empty(e4)


def test_move_to_empty_square_captures_nothing() -> None:
    board = Board.starting_position()
    assert board.move_piece(Square(7, 1), Square(5, 2)) is None


def test_remove_piece() -> None:
    board = Board.starting_position()
    removed = board.remove_piece(square_from_notation("a1"))
    assert removed == Piece(PieceType.ROOK, Color.WHITE)
    assert board.remove_piece(square_from_notation("a1")) is None


def test_locate_king() -> None:
    board = Board.starting_position()
    assert board.locate_king(Color.WHITE) == Square(7, 4)
    assert board.locate_king(Color.BLACK) == Square(0, 4)


@pytest.mark.parametrize("fen", [EMPTY_FEN, "k7/8/8/8/8/8/8/K6K"])
def test_locate_king_requires_exactly_one_king(fen: str) -> None:
    with pytest.raises(InvariantViolationError):
        Board.from_fen(fen).locate_king(Color.WHITE)


def test_serialize() -> None:
    grid = Board.starting_position().serialize()
    assert len(grid) == 8
    assert all(len(row) == 8 for row in grid)
    assert grid[0] == ["bR", "bN", "bB", "bQ", "bK", "bB", "bN", "bR"]
    assert grid[6] == ["wP"] * 8
    assert grid[4] == [""] * 8
