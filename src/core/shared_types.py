"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class GameResult(StrEnum):
    """Values are the result strings stored by the persistence layer and shown to viewers."""

    WHITE_WON = "1-0"
    BLACK_WON = "0-1"

    @classmethod
    def won_by(cls, color: Color) -> "GameResult":
        return cls.WHITE_WON if color == Color.WHITE else cls.BLACK_WON
