"""
Conversion between algebraic square names ('e4') and board coordinates, and between promotion characters and piece types.

The lookup tables below are plain module constants: they are filled once at import time and only ever read afterwards.
"""

from typing import Optional

from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import InvalidFieldError, OutOfBoundsError
from src.core.shared_types import PieceType

FILE_TO_COLUMN: dict[str, int] = {
    letter: column for column, letter in enumerate("abcdefgh")
}
COLUMN_TO_FILE: dict[int, str] = {
    column: letter for letter, column in FILE_TO_COLUMN.items()
}

# Rank 8 is on row 0, rank 1 on row 7
RANK_TO_ROW: dict[str, int] = {
    str(rank): BOARD_DIMENSIONS[0] - rank for rank in range(1, BOARD_DIMENSIONS[0] + 1)
}
ROW_TO_RANK: dict[int, str] = {row: rank for rank, row in RANK_TO_ROW.items()}

PROMOTION_PIECES: dict[str, PieceType] = {
    "Q": PieceType.QUEEN,
    "R": PieceType.ROOK,
    "B": PieceType.BISHOP,
    "N": PieceType.KNIGHT,
}


def square_from_notation(notation: str, field_name: str = "square") -> Square:
    """'a8' -> Square(0, 0), 'h1' -> Square(7, 7)"""
    if len(notation) != 2:
        raise InvalidFieldError(
            f"The {field_name} field in your request is incorrect: {notation!r}"
        )

    file_letter, rank_digit = notation
    if file_letter not in FILE_TO_COLUMN or rank_digit not in RANK_TO_ROW:
        raise OutOfBoundsError(
            f"{notation!r} is not inside the bounds of the chessboard"
        )
    return Square(row=RANK_TO_ROW[rank_digit], col=FILE_TO_COLUMN[file_letter])


def squares_from_notation(from_notation: str, to_notation: str) -> tuple[Square, Square]:
    """Resolve both squares of a move request."""
    from_square = square_from_notation(from_notation, field_name="from")
    to_square = square_from_notation(to_notation, field_name="to")
    return from_square, to_square


def notation_from_square(square: Square) -> str:
    if not square.is_within_bounds():
        raise OutOfBoundsError(
            f"Square(row={square.row}, col={square.col}) is not inside the bounds of the chessboard"
        )
    return f"{COLUMN_TO_FILE[square.col]}{ROW_TO_RANK[square.row]}"


def promotion_piece_from_char(character: str) -> Optional[PieceType]:
    """Q, R, B and N are the only valid choices. Anything else (including a blank) means: no promotion piece."""
    return PROMOTION_PIECES.get(character)
