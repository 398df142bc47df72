"""Defines the chess pieces"""

from dataclasses import dataclass
from typing import Self

from src.core.shared_types import Color, PieceType

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# Letters used in move notation and in the serialized board ("wK", "bP", ...)
PIECE_LETTERS: dict[PieceType, str] = {
    piece_type: fen.upper() for piece_type, fen in PIECE_TO_FEN.items()
}

COLOR_CODES: dict[Color, str] = {Color.WHITE: "w", Color.BLACK: "b"}


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    def to_code(self) -> str:
        """Two-character code: color then piece letter, e.g. 'wK' for the white king."""
        return f"{COLOR_CODES[self.color]}{PIECE_LETTERS[self.type]}"

    @property
    def letter(self) -> str:
        return PIECE_LETTERS[self.type]
