"""
Definition of a move + the geometry shared by the validation and attack rules.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.notation import promotion_piece_from_char, squares_from_notation
from src.chess.square import Square
from src.core.shared_types import Color, PieceType

Vector = tuple[int, int]

KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
KING_DELTAS: list[Vector] = DIAGONALS + STRAIGHTS

# White moves UP the board (towards row 0), black moves DOWN
PAWN_FORWARD: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_HOME_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square
    promote_to: Optional[PieceType] = None

    @classmethod
    def from_notation(cls, from_notation: str, to_notation: str, promotion: str = "") -> Self:
        """
        Build a move from a request: two square names and a promotion character.

        examples:
        * ("e2", "e4", ""): move the piece that was on e2 to e4
        * ("e7", "e8", "Q"): (pawn) moves from e7 to e8 and promotes to a queen
        """
        from_square, to_square = squares_from_notation(from_notation, to_notation)
        return cls(from_square, to_square, promotion_piece_from_char(promotion))

    @property
    def row_diff(self) -> int:
        return self.to_square.row - self.from_square.row

    @property
    def col_diff(self) -> int:
        return self.to_square.col - self.from_square.col


def sign(value: int) -> int:
    return (value > 0) - (value < 0)


def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    The squares strictly in between two squares on the same rank, file or diagonal.

    Needed for: blocked sliding moves, and finding squares where a check can be blocked.
    """
    d_row = to_square.row - from_square.row
    d_col = to_square.col - from_square.col
    on_a_line = d_row == 0 or d_col == 0 or abs(d_row) == abs(d_col)
    if not on_a_line:
        raise ValueError(
            f"squares_between requires both squares to lie on the same line. \n from: {from_square}\n to:{to_square}"
        )

    step = (sign(d_row), sign(d_col))
    distance = max(abs(d_row), abs(d_col))
    return [
        Square(from_square.row + i * step[0], from_square.col + i * step[1])
        for i in range(1, distance)
    ]
