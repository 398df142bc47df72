"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Self

from src.chess.notation import square_from_notation
from src.chess.square import Square
from src.core.shared_types import Color


class CastlingDirection(Enum):
    """The four castling directions. Values represent their encodings in FEN string."""

    WHITE_SHORT = "K"
    WHITE_LONG = "Q"
    BLACK_SHORT = "k"
    BLACK_LONG = "q"


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: If castling rights have not been revoked, the king is still on its starting square.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below (from CastlingDirection) more readable"""
        king_from = square_from_notation(k_from)
        king_to = square_from_notation(k_to)
        rook_from = square_from_notation(r_from)
        rook_to = square_from_notation(r_to)
        return cls(king_from, king_to, rook_from, rook_to)

    @property
    def between(self) -> list[Square]:
        """Squares between king and rook. All of them must be empty."""
        row = self.king_from.row
        low, high = sorted((self.king_from.col, self.rook_from.col))
        return [Square(row, col) for col in range(low + 1, high)]

    @property
    def king_path(self) -> list[Square]:
        """Start, transit and destination square of the king. None of them may be attacked."""
        row = self.king_from.row
        step = 1 if self.king_to.col > self.king_from.col else -1
        return [
            Square(row, col)
            for col in range(self.king_from.col, self.king_to.col + step, step)
        ]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[CastlingDirection, CastlingSquares] = {
    CastlingDirection.WHITE_SHORT: CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    CastlingDirection.WHITE_LONG: CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    CastlingDirection.BLACK_SHORT: CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    CastlingDirection.BLACK_LONG: CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}

CASTLING_NOTATION: dict[CastlingDirection, str] = {
    CastlingDirection.WHITE_SHORT: "0-0",
    CastlingDirection.WHITE_LONG: "0-0-0",
    CastlingDirection.BLACK_SHORT: "0-0",
    CastlingDirection.BLACK_LONG: "0-0-0",
}

CASTLING_COLOR: dict[CastlingDirection, Color] = {
    CastlingDirection.WHITE_SHORT: Color.WHITE,
    CastlingDirection.WHITE_LONG: Color.WHITE,
    CastlingDirection.BLACK_SHORT: Color.BLACK,
    CastlingDirection.BLACK_LONG: Color.BLACK,
}


def castling_directions(color: Color) -> list[CastlingDirection]:
    return [
        direction
        for direction, direction_color in CASTLING_COLOR.items()
        if direction_color == color
    ]


def castling_direction_for(king_from: Square, king_to: Square) -> Optional[CastlingDirection]:
    """Match a king move against the four fixed castling geometries."""
    for direction, squares in CASTLING_RULES.items():
        if squares.king_from == king_from and squares.king_to == king_to:
            return direction
    return None


@dataclass
class CastlingRights:
    """Rights only ever get revoked, never restored."""

    white_short: bool = True
    white_long: bool = True
    black_short: bool = True
    black_long: bool = True

    def allows(self, direction: CastlingDirection) -> bool:
        return getattr(self, _RIGHTS_FIELD[direction])

    def revoke(self, direction: CastlingDirection) -> None:
        setattr(self, _RIGHTS_FIELD[direction], False)

    def revoke_all(self, color: Color) -> None:
        for direction in castling_directions(color):
            self.revoke(direction)

    @classmethod
    def none(cls) -> Self:
        return cls(False, False, False, False)

    @classmethod
    def from_fen(cls, castle_fen: str) -> Self:
        """parse the part of the FEN string that encodes castling rights ('KQkq', 'Kq', '-', ...)"""
        rights = cls.none()
        for direction in CastlingDirection:
            if direction.value in castle_fen:
                setattr(rights, _RIGHTS_FIELD[direction], True)
        return rights


_RIGHTS_FIELD: dict[CastlingDirection, str] = {
    CastlingDirection.WHITE_SHORT: "white_short",
    CastlingDirection.WHITE_LONG: "white_long",
    CastlingDirection.BLACK_SHORT: "black_short",
    CastlingDirection.BLACK_LONG: "black_long",
}
