"""Unit tests for /src/chess/moves.py"""

import pytest

from src.chess.moves import Move, squares_between
from src.chess.notation import square_from_notation
from src.chess.square import Square
from src.core.exceptions import InvalidFieldError, OutOfBoundsError
from src.core.shared_types import PieceType


def test_move_from_notation() -> None:
    move = Move.from_notation("e2", "e4")
    assert move.from_square == Square(6, 4)
    assert move.to_square == Square(4, 4)
    assert move.promote_to is None
    assert (move.row_diff, move.col_diff) == (-2, 0)


def test_move_with_promotion() -> None:
    move = Move.from_notation("e7", "e8", "Q")
    assert move.promote_to == PieceType.QUEEN


def test_move_from_notation_rejects_bad_squares() -> None:
    with pytest.raises(InvalidFieldError):
        Move.from_notation("e2", "e")
    with pytest.raises(OutOfBoundsError):
        Move.from_notation("z2", "e4")


@pytest.mark.parametrize(
    "from_name, to_name, expected",
    [
        ("a1", "a4", ["a2", "a3"]),
        ("h8", "e8", ["g8", "f8"]),
        ("c1", "f4", ["d2", "e3"]),
        ("d4", "d5", []),
        ("b7", "b7", []),
    ],
)
def test_squares_between(from_name: str, to_name: str, expected: list[str]) -> None:
    between = squares_between(square_from_notation(from_name), square_from_notation(to_name))
    assert between == [square_from_notation(name) for name in expected]


def test_squares_between_requires_a_line() -> None:
    with pytest.raises(ValueError):
        squares_between(square_from_notation("b1"), square_from_notation("c3"))
